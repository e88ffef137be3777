from __future__ import annotations

import re
import uuid


class PlaceholderSet:
    """Swaps fragments out of a text and back again.

    Tokens are salted per instance, so text that merely looks like a token
    is never replaced on release.
    """

    def __init__(self, label: str) -> None:
        self._prefix = f"___{label}_{uuid.uuid4().hex}_"
        self._pattern = re.compile(re.escape(self._prefix) + r"(\d+)___")
        self._held: list[str] = []

    def hold(self, fragment: str) -> str:
        self._held.append(fragment)
        return f"{self._prefix}{len(self._held) - 1}___"

    def hold_matches(self, pattern: re.Pattern[str], text: str) -> str:
        return pattern.sub(lambda match: self.hold(match.group(0)), text)

    def release(self, text: str) -> str:
        if not self._held:
            return text
        return self._pattern.sub(lambda match: self._held[int(match.group(1))], text)


__all__ = ["PlaceholderSet"]
