"""Domain models for minification requests and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .detection import Language


@dataclass(frozen=True, slots=True)
class FormatOptions:
    comments: bool = False
    convert_colors_to_hex: bool = True


@dataclass(frozen=True, slots=True)
class MinificationOptions:
    """Per-request settings; never mutated once built."""

    mangle: bool = True
    format: FormatOptions = field(default_factory=FormatOptions)
    language: Language = Language.AUTO

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any] | None) -> MinificationOptions:
        if not payload:
            return cls()
        fmt = payload.get("format")
        fmt = fmt if isinstance(fmt, Mapping) else {}
        convert = fmt.get("convertColorsToHex", fmt.get("convert_colors_to_hex"))
        return cls(
            mangle=bool(payload.get("mangle", True)),
            format=FormatOptions(
                comments=bool(fmt.get("comments", False)),
                convert_colors_to_hex=convert is not False,
            ),
            language=Language.parse(payload.get("language")),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "mangle": self.mangle,
            "format": {
                "comments": self.format.comments,
                "convertColorsToHex": self.format.convert_colors_to_hex,
            },
            "language": self.language.value,
        }


@dataclass(slots=True)
class MinificationResult:
    """Outcome of one run; a non-empty ``error`` means failure whatever ``code`` holds."""

    code: str
    original_size: int
    minified_size: int
    source_map: str | None = None
    error: str | None = None
    detected_language: Language | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.error

    @property
    def compression_ratio(self) -> float:
        if self.original_size <= 0:
            return 0.0
        saved = (self.original_size - self.minified_size) / self.original_size * 100
        return round(saved, 1)

    def to_message(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "originalSize": self.original_size,
            "minifiedSize": self.minified_size,
            "compressionRatio": self.compression_ratio,
        }
        if self.source_map is not None:
            payload["sourceMap"] = self.source_map
        if self.error:
            payload["error"] = self.error
        if self.detected_language is not None:
            payload["detectedLanguage"] = self.detected_language.value
        if self.warnings:
            payload["warnings"] = list(self.warnings)
        return payload


__all__ = [
    "FormatOptions",
    "MinificationOptions",
    "MinificationResult",
]
