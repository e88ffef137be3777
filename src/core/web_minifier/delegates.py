"""External minifiers the engine hands work to.

Both collaborators are defined by a small protocol so the service can be
built with stand-ins; the default implementations wrap ``rjsmin`` and
``minify-html``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import minify_html
import rjsmin


class DelegateError(RuntimeError):
    """Raised when an external minifier returns unusable output."""


@dataclass(frozen=True, slots=True)
class JSMinifyConfig:
    mangle: bool = True
    comments: bool = False


@dataclass(slots=True)
class JSMinifyOutput:
    code: str
    source_map: str | None = None


class JSDelegate(Protocol):
    def minify(self, code: str, config: JSMinifyConfig) -> JSMinifyOutput:  # pragma: no cover - interface
        ...


class RjsminDelegate:
    """JavaScript minification through ``rjsmin``.

    ``rjsmin`` strips whitespace and comments but never renames identifiers,
    so ``mangle`` is accepted and ignored. Kept comments are limited to the
    ``/*! ... */`` form, which is what ``rjsmin`` can preserve.
    """

    def minify(self, code: str, config: JSMinifyConfig) -> JSMinifyOutput:
        result = rjsmin.jsmin(code, keep_bang_comments=config.comments)
        if not result and code.strip():
            raise DelegateError("Minification resulted in empty code")
        return JSMinifyOutput(code=result)


@dataclass(frozen=True, slots=True)
class AdvancedHTMLConfig:
    remove_comments: bool = True
    collapse_whitespace: bool = True
    minify_css: bool = True
    minify_js: bool = True
    remove_redundant_attributes: bool = True
    use_short_doctype: bool = True


class AdvancedHTMLMinifier(Protocol):
    def minify(self, html: str, config: AdvancedHTMLConfig) -> str:  # pragma: no cover - interface
        ...


class MinifyHtmlMinifier:
    """Advanced HTML minification through ``minify-html``.

    Whitespace collapsing, redundant attribute removal and doctype
    shortening are always performed by ``minify-html``; a config asking to
    skip them is refused rather than silently ignored.
    """

    def minify(self, html: str, config: AdvancedHTMLConfig) -> str:
        if not (
            config.collapse_whitespace
            and config.remove_redundant_attributes
            and config.use_short_doctype
        ):
            raise DelegateError("minify-html cannot disable whitespace, attribute or doctype minification")
        return minify_html.minify(
            html,
            keep_comments=not config.remove_comments,
            minify_css=config.minify_css,
            minify_js=config.minify_js,
        )


def load_advanced_minifier(enabled: bool) -> AdvancedHTMLMinifier | None:
    if not enabled:
        return None
    return MinifyHtmlMinifier()


__all__ = [
    "AdvancedHTMLConfig",
    "AdvancedHTMLMinifier",
    "DelegateError",
    "JSDelegate",
    "JSMinifyConfig",
    "JSMinifyOutput",
    "MinifyHtmlMinifier",
    "RjsminDelegate",
    "load_advanced_minifier",
]
