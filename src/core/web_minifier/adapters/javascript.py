from __future__ import annotations

import logging
import re

from .base import AdapterResponse
from ..delegates import JSDelegate, JSMinifyConfig, RjsminDelegate
from ..detection import Language
from ..models import MinificationOptions
from ..utils import collapse_whitespace

logger = logging.getLogger(__name__)

LINE_COMMENT_RE = re.compile(r"//.*$", re.MULTILINE)
BLOCK_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")


def fallback_minify(code: str, options: MinificationOptions) -> str:
    """Comment stripping and whitespace collapsing only; cannot fail."""

    text = code
    if not options.format.comments:
        text = LINE_COMMENT_RE.sub("", text)
        text = BLOCK_COMMENT_RE.sub("", text)
    return collapse_whitespace(text).strip()


class JavaScriptAdapter:
    language = Language.JAVASCRIPT

    def __init__(self, delegate: JSDelegate | None = None) -> None:
        self._delegate = delegate or RjsminDelegate()

    def minify(self, code: str, options: MinificationOptions) -> AdapterResponse:
        config = JSMinifyConfig(mangle=options.mangle, comments=options.format.comments)
        try:
            output = self._delegate.minify(code, config)
        except Exception as exc:
            logger.warning("JavaScript delegate failed, using fallback minifier: %s", exc)
            return AdapterResponse(code=fallback_minify(code, options), warnings=["JS_FALLBACK"])
        return AdapterResponse(code=output.code, source_map=output.source_map)


__all__ = ["JavaScriptAdapter", "fallback_minify"]
