"""Caret arithmetic that consumes action codes on the host side.

The state machine only names an action; these helpers execute it against a
plain text + absolute offset pair. Nothing here holds state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from ghost_engine.modes.base_mode import ActionCode


@dataclass(frozen=True, slots=True)
class CaretEdit:
    text: str
    caret: int
    changed: bool = False


def clamp(text: str, offset: int) -> int:
    return max(0, min(offset, len(text)))


def line_bounds(text: str, offset: int) -> Tuple[int, int]:
    """Return ``(start, end)`` of the line holding ``offset``; ``end`` excludes ``\\n``."""

    offset = clamp(text, offset)
    start = text.rfind("\n", 0, offset) + 1
    end = text.find("\n", offset)
    if end == -1:
        end = len(text)
    return start, end


def column_of(text: str, offset: int) -> int:
    start, _ = line_bounds(text, offset)
    return clamp(text, offset) - start


def move_left(text: str, offset: int) -> int:
    return clamp(text, offset - 1)


def move_right(text: str, offset: int) -> int:
    return clamp(text, offset + 1)


def move_up(text: str, offset: int) -> int:
    offset = clamp(text, offset)
    start, _ = line_bounds(text, offset)
    if start == 0:
        return offset
    column = offset - start
    target_end = start - 1
    target_start = text.rfind("\n", 0, target_end) + 1
    return target_start + min(column, target_end - target_start)


def move_down(text: str, offset: int) -> int:
    offset = clamp(text, offset)
    start, end = line_bounds(text, offset)
    if end == len(text):
        return offset
    column = offset - start
    target_start = end + 1
    target_end = text.find("\n", target_start)
    if target_end == -1:
        target_end = len(text)
    return target_start + min(column, target_end - target_start)


def delete_char(text: str, offset: int) -> Tuple[str, int]:
    """Remove the character under the caret; line breaks are left alone."""

    offset = clamp(text, offset)
    if offset >= len(text) or text[offset] == "\n":
        return text, offset
    return text[:offset] + text[offset + 1 :], offset


_MOTIONS: Dict[ActionCode, Callable[[str, int], int]] = {
    ActionCode.MOVE_LEFT: move_left,
    ActionCode.MOVE_RIGHT: move_right,
    ActionCode.MOVE_UP: move_up,
    ActionCode.MOVE_DOWN: move_down,
}


def apply_action(text: str, offset: int, action: ActionCode) -> CaretEdit:
    """Execute ``action`` at ``offset``; mode switches and NONE leave both untouched."""

    offset = clamp(text, offset)
    motion = _MOTIONS.get(action)
    if motion is not None:
        return CaretEdit(text=text, caret=motion(text, offset))
    if action is ActionCode.DELETE_CHAR:
        updated, caret = delete_char(text, offset)
        return CaretEdit(text=updated, caret=caret, changed=updated != text)
    return CaretEdit(text=text, caret=offset)


__all__ = [
    "CaretEdit",
    "apply_action",
    "clamp",
    "column_of",
    "delete_char",
    "line_bounds",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
]
