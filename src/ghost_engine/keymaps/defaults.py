"""Built-in modal table: mode switches plus the hjkl/x primitives."""

from __future__ import annotations

from typing import Iterable

from ghost_engine.modes.base_mode import ActionCode, EditorMode

from .models import Binding
from .registry import KeymapRegistry

ESCAPE_KEY = "Escape"

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(
        id="insert.exit_escape",
        mode=EditorMode.INSERT,
        key=ESCAPE_KEY,
        action=ActionCode.SWITCH_TO_NORMAL,
        switch_to=EditorMode.NORMAL,
        ctrl_or_meta=None,
        description="Leave insert mode",
    ),
    Binding(
        id="normal.enter_insert",
        mode=EditorMode.NORMAL,
        key="i",
        action=ActionCode.SWITCH_TO_INSERT,
        switch_to=EditorMode.INSERT,
        description="Enter insert mode",
    ),
    Binding(
        id="normal.move_left",
        mode=EditorMode.NORMAL,
        key="h",
        action=ActionCode.MOVE_LEFT,
        description="Move caret left",
    ),
    Binding(
        id="normal.move_right",
        mode=EditorMode.NORMAL,
        key="l",
        action=ActionCode.MOVE_RIGHT,
        description="Move caret right",
    ),
    Binding(
        id="normal.move_down",
        mode=EditorMode.NORMAL,
        key="j",
        action=ActionCode.MOVE_DOWN,
        description="Move caret down one line",
    ),
    Binding(
        id="normal.move_up",
        mode=EditorMode.NORMAL,
        key="k",
        action=ActionCode.MOVE_UP,
        description="Move caret up one line",
    ),
    Binding(
        id="normal.delete_char",
        mode=EditorMode.NORMAL,
        key="x",
        action=ActionCode.DELETE_CHAR,
        description="Delete the character under the caret",
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    bindings: Iterable[Binding] = DEFAULT_BINDINGS,
    replace: bool = False,
) -> KeymapRegistry:
    for binding in bindings:
        registry.register_binding(binding, replace=replace)
    return registry


__all__ = ["DEFAULT_BINDINGS", "ESCAPE_KEY", "load_default_keymaps"]
