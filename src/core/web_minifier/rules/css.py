"""Lexical CSS rewriting.

The rewriter is an ordered chain of small ``(text, options) -> text`` steps.
Order matters: later steps assume the normalization done by earlier ones
(zero units are stripped before ``background-position:0`` is expanded,
rgb() is turned into hex before hex literals are shortened, and so on).
Fragments that no step recognizes are passed through untouched.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable

from ..models import MinificationOptions
from .colors import COLOR_RULES
from .placeholders import PlaceholderSet

Step = Callable[[str, MinificationOptions], str]

COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")
MATH_FN_RE = re.compile(
    r"(?<![\w-])(calc|clamp|min|max)\(((?:[^()]|\((?:[^()]|\([^()]*\))*\))*)\)",
    re.IGNORECASE,
)

_WHITESPACE_RE = re.compile(r"\s+")
_PUNCTUATION_RE = re.compile(r"\s*([{}:;,>+~])\s*")
_AT_RULE_RE = re.compile(
    r"@(media|supports|container|layer|keyframes|font-face|page|counter-style|viewport|document)"
    r"(?![\w-])\s*([^{};]*?)\s*([{;])",
    re.IGNORECASE,
)
_ZERO_UNIT_RE = re.compile(
    r"(?<![\w.#-])[-+]?(?:0+(?:\.0*)?|\.0+)(?:em|ex|ch|rem|vw|vh|vmin|vmax|cm|mm|in|px|pt|pc)(?![\w-])"
)
_ZERO_PERCENT_RE = re.compile(r"(?<=[: ])[-+]?(?:0+(?:\.0*)?|\.0+)%(?=[;}\s!]|$)")
_BORDER_NONE_RE = re.compile(r"border:(?i:none)(?=[;}!]|$)")
_BACKGROUND_POSITION_RE = re.compile(r"background-position:0(?=[;}!]|$)")
_VENDOR_RE = re.compile(r"-(webkit|moz|ms|o)-\s+(?=[a-z])")
_URL_RE = re.compile(r"url\(\s*(['\"]?)([^'\")]*?)\s*\1\s*\)")
_GRADIENT_RE = re.compile(
    r"((?:repeating-)?(?:linear|radial|conic)-gradient)\(((?:[^()]|\([^()]*\))*)\)"
)
_VAR_RE = re.compile(r"var\(\s*(--[\w-]+)\s*(?:,((?:[^()]|\([^()]*\))*))?\)")
_IMPORTANT_RE = re.compile(r"\s*!\s*important", re.IGNORECASE)
_EMPTY_CONTENT_RE = re.compile(r"content:\s*(?:''|\"\")")
_PROPERTY_RE = re.compile(r"([;{])\s*([\w-]+)\s*:")
_COMBINATOR_RE = re.compile(r"\s*([>+~,])\s*")


def outside_math(text: str, transform: Callable[[str], str]) -> str:
    """Apply *transform* to everything except math function calls.

    ``calc()``, ``clamp()``, ``min()`` and ``max()`` need the whitespace around
    binary ``+`` and ``-`` kept, so their bodies are only touched by
    :func:`compact_math`.
    """

    parts: list[str] = []
    last = 0
    for match in MATH_FN_RE.finditer(text):
        parts.append(transform(text[last:match.start()]))
        parts.append(match.group(0))
        last = match.end()
    parts.append(transform(text[last:]))
    return "".join(parts)


def strip_comments(text: str, options: MinificationOptions) -> str:
    if options.format.comments:
        return text
    return COMMENT_RE.sub("", text)


def collapse_structure(text: str, options: MinificationOptions) -> str:
    text = _WHITESPACE_RE.sub(" ", text)
    text = outside_math(text, lambda chunk: _PUNCTUATION_RE.sub(r"\1", chunk))
    return text.replace(";}", "}").strip()


def normalize_at_rules(text: str, options: MinificationOptions) -> str:
    def _replace(match: re.Match[str]) -> str:
        name, condition, terminator = match.groups()
        if not condition:
            return f"@{name}{terminator}"
        return f"@{name} {condition}{terminator}"

    return _AT_RULE_RE.sub(_replace, text)


def strip_zero_units(text: str, options: MinificationOptions) -> str:
    def _strip(chunk: str) -> str:
        chunk = _ZERO_UNIT_RE.sub("0", chunk)
        return _ZERO_PERCENT_RE.sub("0", chunk)

    return outside_math(text, _strip)


def canonicalize_keywords(text: str, options: MinificationOptions) -> str:
    text = _BORDER_NONE_RE.sub("border:0", text)
    return _BACKGROUND_POSITION_RE.sub("background-position:0 0", text)


def compact_math(text: str, options: MinificationOptions) -> str:
    def _replace(match: re.Match[str]) -> str:
        name, body = match.groups()
        body = _WHITESPACE_RE.sub(" ", body).strip()
        body = re.sub(r"\s*([*/,])\s*", r"\1", body)
        body = re.sub(r"\(\s+", "(", body)
        body = re.sub(r"\s+\)", ")", body)
        # binary + and - need whitespace on both sides
        body = re.sub(r"(?<=[\w%.)])\s*\+\s*(?=[\w.(])", " + ", body)
        body = re.sub(r"(?<=[\w%.)])\s+-\s+(?=[\w.(])", " - ", body)
        return f"{name}({body})"

    return MATH_FN_RE.sub(_replace, text)


def normalize_vendor_prefixes(text: str, options: MinificationOptions) -> str:
    return _VENDOR_RE.sub(r"-\1-", text)


def normalize_urls(text: str, options: MinificationOptions) -> str:
    return _URL_RE.sub(r"url(\1\2\1)", text)


def normalize_gradients(text: str, options: MinificationOptions) -> str:
    def _replace(match: re.Match[str]) -> str:
        body = _WHITESPACE_RE.sub(" ", match.group(2))
        body = re.sub(r"\s*,\s*", ",", body)
        body = re.sub(r"\(\s+", "(", body)
        body = re.sub(r"\s+\)", ")", body)
        return f"{match.group(1)}({body.strip()})"

    return _GRADIENT_RE.sub(_replace, text)


def normalize_variables(text: str, options: MinificationOptions) -> str:
    def _replace(match: re.Match[str]) -> str:
        name, fallback = match.groups()
        if fallback is None:
            return f"var({name})"
        return f"var({name},{fallback.strip()})"

    return _VAR_RE.sub(_replace, text)


def normalize_important(text: str, options: MinificationOptions) -> str:
    return _IMPORTANT_RE.sub("!important", text)


def normalize_empty_content(text: str, options: MinificationOptions) -> str:
    return _EMPTY_CONTENT_RE.sub('content:""', text)


def tighten_properties(text: str, options: MinificationOptions) -> str:
    return _PROPERTY_RE.sub(r"\1\2:", text)


def tighten_combinators(text: str, options: MinificationOptions) -> str:
    return outside_math(text, lambda chunk: _COMBINATOR_RE.sub(r"\1", chunk))


def trim(text: str, options: MinificationOptions) -> str:
    return text.strip()


# Steps 8 to 14: also re-applied by the HTML rewriter on the whole document.
VALUE_RULES: tuple[Step, ...] = (
    *COLOR_RULES,
    normalize_urls,
    normalize_gradients,
    normalize_variables,
    normalize_important,
    normalize_empty_content,
    tighten_properties,
    tighten_combinators,
)

CSS_PIPELINE: tuple[Step, ...] = (
    strip_comments,
    collapse_structure,
    normalize_at_rules,
    strip_zero_units,
    canonicalize_keywords,
    compact_math,
    normalize_vendor_prefixes,
    *VALUE_RULES,
    trim,
)


def apply_steps(text: str, steps: Iterable[Step], options: MinificationOptions) -> str:
    for step in steps:
        text = step(text, options)
    return text


def rewrite_css(code: str, options: MinificationOptions) -> str:
    if not options.format.comments:
        return apply_steps(code, CSS_PIPELINE, options)
    # kept comments are held out of every step and come back verbatim
    held = PlaceholderSet("COMMENT")
    text = held.hold_matches(COMMENT_RE, code)
    return held.release(apply_steps(text, CSS_PIPELINE, options))


__all__ = [
    "CSS_PIPELINE",
    "Step",
    "VALUE_RULES",
    "apply_steps",
    "canonicalize_keywords",
    "collapse_structure",
    "compact_math",
    "normalize_at_rules",
    "normalize_empty_content",
    "normalize_gradients",
    "normalize_important",
    "normalize_urls",
    "normalize_variables",
    "normalize_vendor_prefixes",
    "outside_math",
    "rewrite_css",
    "strip_comments",
    "strip_zero_units",
    "tighten_combinators",
    "tighten_properties",
]
