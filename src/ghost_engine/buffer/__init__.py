"""Document storage and undo history."""

from .document import BufferDocument
from .undo import DEFAULT_UNDO_CAPACITY, Snapshot, UndoHistory

__all__ = [
    "BufferDocument",
    "Snapshot",
    "UndoHistory",
    "DEFAULT_UNDO_CAPACITY",
]
