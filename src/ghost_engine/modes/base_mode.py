"""Mode and action vocabulary shared by the state machine and its hosts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EditorMode(str, Enum):
    """Exactly one mode is active at a time; the engine starts in INSERT."""

    NORMAL = "normal"
    INSERT = "insert"


INITIAL_MODE = EditorMode.INSERT


class ActionCode(str, Enum):
    """What the host should do in response to a key."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    DELETE_CHAR = "delete_char"
    SWITCH_TO_NORMAL = "switch_to_normal"
    SWITCH_TO_INSERT = "switch_to_insert"
    NONE = "none"

    @property
    def is_motion(self) -> bool:
        return self in _MOTIONS

    @property
    def is_mode_switch(self) -> bool:
        return self in (ActionCode.SWITCH_TO_NORMAL, ActionCode.SWITCH_TO_INSERT)


_MOTIONS = frozenset(
    {
        ActionCode.MOVE_LEFT,
        ActionCode.MOVE_RIGHT,
        ActionCode.MOVE_UP,
        ActionCode.MOVE_DOWN,
    }
)


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """Normalized key press forwarded by the host."""

    key: str
    ctrl_or_meta: bool = False


@dataclass(frozen=True, slots=True)
class Transition:
    """Result of classifying one key against one mode."""

    previous: EditorMode
    mode: EditorMode
    action: ActionCode = ActionCode.NONE
    binding_id: Optional[str] = None

    @property
    def switched(self) -> bool:
        return self.previous is not self.mode

    @property
    def passes_through(self) -> bool:
        """True when the host should insert the key as ordinary text."""

        return self.action is ActionCode.NONE and self.mode is EditorMode.INSERT
