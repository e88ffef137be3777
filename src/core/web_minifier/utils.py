from __future__ import annotations

import os
import re
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Iterator

_WHITESPACE_RE = re.compile(r"\s+")


def utf8_size(text: str) -> int:
    return len(text.encode("utf-8"))


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text)


def minified_name(source: Path) -> str:
    return f"minified-{source.name}" if source.name else "minified.txt"


def atomic_write(path: Path, data: str, encoding: str = "utf-8") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile("w", delete=False, dir=path.parent, encoding=encoding) as tmp:
        tmp.write(data)
        tmp.flush()
        os.fsync(tmp.fileno())
    os.replace(tmp.name, path)


def iter_files(paths: Iterable[Path]) -> Iterator[Path]:
    for path in paths:
        if path.is_file():
            yield path
        elif path.is_dir():
            for file_path in sorted(path.rglob("*")):
                if file_path.is_file():
                    yield file_path


def size_within_limit(text: str, max_kb: int) -> bool:
    return utf8_size(text) <= max_kb * 1024


__all__ = [
    "atomic_write",
    "collapse_whitespace",
    "iter_files",
    "minified_name",
    "size_within_limit",
    "utf8_size",
]
