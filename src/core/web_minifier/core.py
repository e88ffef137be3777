from __future__ import annotations

import logging
import time
from typing import Mapping

from .adapters import Adapter, build_adapters
from .delegates import AdvancedHTMLMinifier, JSDelegate
from .detection import Language, detect_language
from .models import MinificationOptions, MinificationResult
from .utils import utf8_size

logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "No code provided"


class MinificationError(RuntimeError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class MinificationService:
    """Detects the language, runs the matching pipeline and measures sizes.

    Failures never escape :meth:`run`; they come back as results with
    ``error`` set. Both external collaborators are injected once and only
    read afterwards.
    """

    def __init__(
        self,
        *,
        js_delegate: JSDelegate | None = None,
        advanced_html: AdvancedHTMLMinifier | None = None,
        adapters: Mapping[Language, Adapter] | None = None,
    ) -> None:
        self._adapters = dict(adapters) if adapters is not None else build_adapters(
            js_delegate=js_delegate,
            advanced_html=advanced_html,
        )
        self._advanced_html = advanced_html

    @property
    def has_advanced_html(self) -> bool:
        return self._advanced_html is not None

    def run(self, code: str, options: MinificationOptions | None = None) -> MinificationResult:
        opts = options or MinificationOptions()
        original_size = utf8_size(code or "")
        if not code or not code.strip():
            return self._error_result(EMPTY_INPUT_MESSAGE, original_size, None)

        detected: Language | None = None
        try:
            language = opts.language
            if language is Language.AUTO:
                detected = detect_language(code)
                language = detected
            start = time.perf_counter()
            response = self._get_adapter(language).minify(code, opts)
            elapsed = (time.perf_counter() - start) * 1000
        except Exception as exc:
            logger.exception("Minification failed")
            return self._error_result(str(exc) or exc.__class__.__name__, original_size, detected)

        minified_size = utf8_size(response.code)
        logger.debug(
            "Minified %s: %d -> %d bytes in %.1fms",
            language.value,
            original_size,
            minified_size,
            elapsed,
        )
        return MinificationResult(
            code=response.code,
            original_size=original_size,
            minified_size=minified_size,
            source_map=response.source_map,
            detected_language=detected,
            warnings=list(response.warnings),
        )

    def _get_adapter(self, language: Language) -> Adapter:
        try:
            return self._adapters[language]
        except KeyError as exc:
            raise MinificationError("NO_ADAPTER", f"No minifier for {language.value}") from exc

    def _error_result(
        self, message: str, original_size: int, detected: Language | None
    ) -> MinificationResult:
        return MinificationResult(
            code="",
            original_size=original_size,
            minified_size=original_size,
            error=message,
            detected_language=detected,
        )


__all__ = [
    "EMPTY_INPUT_MESSAGE",
    "MinificationError",
    "MinificationService",
]
