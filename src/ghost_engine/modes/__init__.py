"""Modal (Normal/Insert) key classification."""

from .base_mode import INITIAL_MODE, ActionCode, EditorMode, KeyEvent, Transition

__all__ = [
    "ActionCode",
    "EditorMode",
    "INITIAL_MODE",
    "KeyEvent",
    "Transition",
]
