"""Color canonicalization shared by the CSS and HTML rewriters.

Every channel is clamped with saturation: out-of-range values are capped at
the nearest bound instead of being rejected, so ``rgb(300,-10,999)`` becomes
``rgb(255,0,255)`` (or ``#f0f``).
"""

from __future__ import annotations

import re

from ..models import MinificationOptions

_INT = r"\s*(-?\d+)\s*"
_ALPHA = r"\s*(-?\d*\.?\d+)\s*"

RGBA_RE = re.compile(rf"rgba\({_INT},{_INT},{_INT},{_ALPHA}\)")
RGB_RE = re.compile(rf"rgb\({_INT},{_INT},{_INT}\)")
HSL_RE = re.compile(rf"hsl\({_INT},{_INT}%\s*,{_INT}%\s*\)")
HSLA_RE = re.compile(rf"hsla\({_INT},{_INT}%\s*,{_INT}%\s*,{_ALPHA}\)")
HEX6_RE = re.compile(
    r"(?<![&\w])#([0-9a-fA-F])\1([0-9a-fA-F])\2([0-9a-fA-F])\3(?![0-9a-fA-F])"
)
COLOR_FN_RE = re.compile(r"color\(\s*([a-zA-Z][\w-]*)\s+([\d\s.%,/-]+?)\s*\)")


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def wrap_hue(value: int) -> int:
    return ((value % 360) + 360) % 360


def to_hex(red: int, green: int, blue: int) -> str:
    pairs = [f"{channel:02x}" for channel in (red, green, blue)]
    if all(pair[0] == pair[1] for pair in pairs):
        return "#" + "".join(pair[0] for pair in pairs)
    return "#" + "".join(pairs)


def _channels(match: re.Match[str]) -> tuple[int, int, int]:
    return tuple(int(clamp(int(match.group(i)), 0, 255)) for i in (1, 2, 3))  # type: ignore[return-value]


def rewrite_rgba(text: str, options: MinificationOptions) -> str:
    def _replace(match: re.Match[str]) -> str:
        red, green, blue = _channels(match)
        alpha = clamp(float(match.group(4)), 0, 1)
        return f"rgba({red},{green},{blue},{format_number(alpha)})"

    return RGBA_RE.sub(_replace, text)


def rewrite_rgb(text: str, options: MinificationOptions) -> str:
    def _replace(match: re.Match[str]) -> str:
        red, green, blue = _channels(match)
        if options.format.convert_colors_to_hex:
            return to_hex(red, green, blue)
        return f"rgb({red},{green},{blue})"

    return RGB_RE.sub(_replace, text)


def rewrite_hsl(text: str, options: MinificationOptions) -> str:
    def _replace(match: re.Match[str]) -> str:
        hue = wrap_hue(int(match.group(1)))
        saturation = int(clamp(int(match.group(2)), 0, 100))
        lightness = int(clamp(int(match.group(3)), 0, 100))
        return f"hsl({hue},{saturation}%,{lightness}%)"

    return HSL_RE.sub(_replace, text)


def rewrite_hsla(text: str, options: MinificationOptions) -> str:
    def _replace(match: re.Match[str]) -> str:
        hue = wrap_hue(int(match.group(1)))
        saturation = int(clamp(int(match.group(2)), 0, 100))
        lightness = int(clamp(int(match.group(3)), 0, 100))
        alpha = clamp(float(match.group(4)), 0, 1)
        return f"hsla({hue},{saturation}%,{lightness}%,{format_number(alpha)})"

    return HSLA_RE.sub(_replace, text)


def shorten_hex(text: str, options: MinificationOptions) -> str:
    return HEX6_RE.sub(r"#\1\2\3", text)


def rewrite_color_functions(text: str, options: MinificationOptions) -> str:
    def _replace(match: re.Match[str]) -> str:
        values = re.sub(r"\s+", " ", match.group(2).strip())
        values = re.sub(r"\s*([,/])\s*", r"\1", values)
        return f"color({match.group(1)} {values})"

    return COLOR_FN_RE.sub(_replace, text)


# shorten_hex must follow rewrite_rgb so converted colors are shortened too
COLOR_RULES = (
    rewrite_rgba,
    rewrite_rgb,
    rewrite_hsl,
    rewrite_hsla,
    shorten_hex,
    rewrite_color_functions,
)


def canonicalize_colors(text: str, options: MinificationOptions) -> str:
    for rule in COLOR_RULES:
        text = rule(text, options)
    return text


__all__ = [
    "COLOR_RULES",
    "canonicalize_colors",
    "clamp",
    "format_number",
    "rewrite_color_functions",
    "rewrite_hsl",
    "rewrite_hsla",
    "rewrite_rgb",
    "rewrite_rgba",
    "shorten_hex",
    "to_hex",
    "wrap_hue",
]
