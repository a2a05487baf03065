"""Live text buffer owned by the engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class BufferDocument:
    """Mutable document text with a version counter.

    Every replacement bumps ``version`` so derived values (statistics) can be
    memoised per version instead of per call.
    """

    text: str = ""
    version: int = 0

    def replace(self, text: str) -> None:
        self.text = text
        self.version += 1

    @property
    def is_empty(self) -> bool:
        return not self.text

    def __len__(self) -> int:
        return len(self.text)
