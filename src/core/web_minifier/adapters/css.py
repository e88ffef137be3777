from __future__ import annotations

from .base import AdapterResponse
from ..detection import Language
from ..models import MinificationOptions
from ..rules.css import rewrite_css


class CSSAdapter:
    language = Language.CSS

    def minify(self, code: str, options: MinificationOptions) -> AdapterResponse:
        return AdapterResponse(code=rewrite_css(code, options))


__all__ = ["CSSAdapter"]
