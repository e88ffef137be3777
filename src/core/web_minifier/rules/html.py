from __future__ import annotations

import re

from ..models import MinificationOptions
from .css import VALUE_RULES, apply_steps, rewrite_css
from .placeholders import PlaceholderSet

COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")
STYLE_RE = re.compile(r"<style[^>]*>([\s\S]*?)</style>", re.IGNORECASE)
RAW_TEXT_RE = re.compile(r"(<(script|pre|textarea)\b[^>]*>)([\s\S]*?)(</\2\s*>)", re.IGNORECASE)
EMPTY_PAIR_RE = re.compile(r"<([^/\s>]+)([^>]*)>\s+</\1>")

_STRUCTURE_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\s+"), " "),
    (re.compile(r">\s+<"), "><"),
    (re.compile(r"\s+>"), ">"),
    (re.compile(r"<\s+"), "<"),
    (re.compile(r"\s+/>"), "/>"),
    (re.compile(r"\s+([\w-]+)\s*=\s*"), r" \1="),
    (re.compile(r"\s*=\s*"), "="),
)


def strip_comments(text: str, options: MinificationOptions) -> str:
    if options.format.comments:
        return text
    return COMMENT_RE.sub("", text)


def rewrite_style_blocks(text: str, options: MinificationOptions) -> str:
    return STYLE_RE.sub(lambda match: f"<style>{rewrite_css(match.group(1), options)}</style>", text)


def collapse_structure(text: str, options: MinificationOptions) -> str:
    for pattern, replacement in _STRUCTURE_RULES:
        text = pattern.sub(replacement, text)
    lines = [line.strip() for line in text.splitlines()]
    return "\n".join(lines).strip()


def collapse_empty_pairs(text: str, options: MinificationOptions) -> str:
    return EMPTY_PAIR_RE.sub(r"<\1\2></\1>", text)


def collapse_spaces(text: str, options: MinificationOptions) -> str:
    return re.sub(r"\s{2,}", " ", text).strip()


def _hold_raw_text(text: str, held: PlaceholderSet) -> str:
    def _replace(match: re.Match[str]) -> str:
        opening, _, body, closing = match.groups()
        if not body.strip():
            return match.group(0)
        return f"{opening}{held.hold(body)}{closing}"

    return RAW_TEXT_RE.sub(_replace, text)


def rewrite_html(code: str, options: MinificationOptions) -> str:
    """Basic HTML minification.

    Comments go first, then each ``<style>`` body is rewritten as CSS and
    re-wrapped in a bare ``<style>`` tag. Whitespace is collapsed and the CSS
    value rules run again over the whole document, inline ``style``
    attributes included. ``<script>``, ``<pre>`` and ``<textarea>`` bodies
    are kept verbatim.
    """

    held = PlaceholderSet("PRESERVE")
    text = strip_comments(code, options)
    text = _hold_raw_text(text, held)
    text = rewrite_style_blocks(text, options)
    text = collapse_structure(text, options)
    text = apply_steps(text, VALUE_RULES, options)
    text = collapse_empty_pairs(text, options)
    text = collapse_spaces(text, options)
    return held.release(text)


__all__ = [
    "collapse_empty_pairs",
    "collapse_spaces",
    "collapse_structure",
    "rewrite_html",
    "rewrite_style_blocks",
    "strip_comments",
]
