from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from ..models import MinificationOptions


@dataclass(slots=True)
class AdapterResponse:
    code: str
    source_map: str | None = None
    warnings: list[str] = field(default_factory=list)


class Adapter(Protocol):
    def minify(self, code: str, options: MinificationOptions) -> AdapterResponse:  # pragma: no cover - interface
        ...


__all__ = ["Adapter", "AdapterResponse"]
