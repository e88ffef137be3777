from __future__ import annotations

import logging

from core.constraint import ADVANCED_HTML_RATIO

from .base import AdapterResponse
from ..delegates import AdvancedHTMLConfig, AdvancedHTMLMinifier
from ..detection import Language
from ..models import MinificationOptions
from ..rules.html import rewrite_html
from ..utils import utf8_size

logger = logging.getLogger(__name__)


class HTMLAdapter:
    """Basic HTML rewriting with an optional escalation to an advanced minifier.

    The advanced minifier only runs when the basic pass kept at least 80% of
    the input bytes, and its output is used only when strictly smaller.
    """

    language = Language.HTML

    def __init__(self, advanced: AdvancedHTMLMinifier | None = None) -> None:
        self._advanced = advanced

    def minify(self, code: str, options: MinificationOptions) -> AdapterResponse:
        basic = rewrite_html(code, options)
        response = AdapterResponse(code=basic)
        if self._advanced is None:
            return response
        original_size = utf8_size(code)
        basic_size = utf8_size(basic)
        if original_size == 0 or basic_size / original_size < ADVANCED_HTML_RATIO:
            return response
        config = AdvancedHTMLConfig(remove_comments=not options.format.comments)
        try:
            advanced = self._advanced.minify(code, config)
        except Exception as exc:
            logger.warning("Advanced HTML minification failed, keeping basic result: %s", exc)
            response.warnings.append("ADVANCED_HTML_FAILED")
            return response
        if utf8_size(advanced) < basic_size:
            response.code = advanced
            response.warnings.append("ADVANCED_HTML_USED")
        return response


__all__ = ["HTMLAdapter"]
