from __future__ import annotations

from .base import Adapter, AdapterResponse
from .css import CSSAdapter
from .html import HTMLAdapter
from .javascript import JavaScriptAdapter, fallback_minify
from ..delegates import AdvancedHTMLMinifier, JSDelegate
from ..detection import Language


def build_adapters(
    *,
    js_delegate: JSDelegate | None = None,
    advanced_html: AdvancedHTMLMinifier | None = None,
) -> dict[Language, Adapter]:
    return {
        Language.CSS: CSSAdapter(),
        Language.HTML: HTMLAdapter(advanced_html),
        Language.JAVASCRIPT: JavaScriptAdapter(js_delegate),
    }


__all__ = [
    "Adapter",
    "AdapterResponse",
    "CSSAdapter",
    "HTMLAdapter",
    "JavaScriptAdapter",
    "build_adapters",
    "fallback_minify",
]
