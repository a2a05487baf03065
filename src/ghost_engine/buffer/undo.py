"""Bounded snapshot history backing ``Engine.undo``."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional

DEFAULT_UNDO_CAPACITY = 100


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Immutable copy of document content at one point in time."""

    text: str
    version: int = 0


class UndoHistory:
    """Stack of snapshots with FIFO eviction once ``capacity`` is reached."""

    def __init__(self, capacity: int = DEFAULT_UNDO_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("UndoHistory capacity must be at least 1")
        self._entries: Deque[Snapshot] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, snapshot: Snapshot) -> None:
        # deque(maxlen=...) drops the oldest entry on overflow
        self._entries.append(snapshot)

    def pop(self, current: str) -> str:
        """Return the newest snapshot's text, or ``current`` when empty."""

        if not self._entries:
            return current
        return self._entries.pop().text

    def peek(self) -> Optional[Snapshot]:
        if not self._entries:
            return None
        return self._entries[-1]

    def clear(self) -> None:
        self._entries.clear()
