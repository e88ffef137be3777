from __future__ import annotations

import re
from enum import Enum
from pathlib import PurePath


class Language(str, Enum):
    AUTO = "auto"
    JAVASCRIPT = "javascript"
    CSS = "css"
    HTML = "html"

    @classmethod
    def parse(cls, value: str | Language | None) -> Language:
        if value is None or value == "":
            return cls.AUTO
        if isinstance(value, Language):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise DetectionError(f"Unsupported language: {value}") from exc


EXTENSION_MAP: dict[str, Language] = {
    ".js": Language.JAVASCRIPT,
    ".mjs": Language.JAVASCRIPT,
    ".cjs": Language.JAVASCRIPT,
    ".css": Language.CSS,
    ".html": Language.HTML,
    ".htm": Language.HTML,
    ".txt": Language.AUTO,
}

_CSS_START_RE = re.compile(r"^\s*[.#@{]")


class DetectionError(ValueError):
    """Raised when a requested language cannot be understood."""


def detect_language(code: str) -> Language:
    """Guess the language of *code*; the result is never ``Language.AUTO``."""

    if code.strip().startswith("<"):
        return Language.HTML
    if _CSS_START_RE.match(code):
        return Language.CSS
    return Language.JAVASCRIPT


def language_for_filename(name: str | PurePath) -> Language:
    extension = PurePath(name).suffix.lower()
    return EXTENSION_MAP.get(extension, Language.AUTO)


__all__ = [
    "DetectionError",
    "EXTENSION_MAP",
    "Language",
    "detect_language",
    "language_for_filename",
]
