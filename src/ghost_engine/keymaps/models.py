"""Dataclasses describing single-key bindings of the modal table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ghost_engine.modes.base_mode import ActionCode, EditorMode, KeyEvent


@dataclass(frozen=True, slots=True)
class Binding:
    """Maps one key in one mode to an action and an optional mode change.

    ``ctrl_or_meta=None`` matches the key regardless of modifier state;
    ``True``/``False`` require that exact state.
    """

    id: str
    mode: EditorMode
    key: str
    action: ActionCode
    switch_to: Optional[EditorMode] = None
    ctrl_or_meta: Optional[bool] = False
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.key:
            raise ValueError("binding key cannot be empty")
        object.__setattr__(self, "mode", EditorMode(self.mode))
        object.__setattr__(self, "action", ActionCode(self.action))
        if self.switch_to is not None:
            object.__setattr__(self, "switch_to", EditorMode(self.switch_to))

    @property
    def target_mode(self) -> EditorMode:
        return self.switch_to if self.switch_to is not None else self.mode

    def matches(self, event: KeyEvent) -> bool:
        if event.key != self.key:
            return False
        return self.ctrl_or_meta is None or self.ctrl_or_meta is bool(event.ctrl_or_meta)

    def overlaps(self, other: "Binding") -> bool:
        """True when some key event would match both bindings."""

        if self.mode is not other.mode or self.key != other.key:
            return False
        if self.ctrl_or_meta is None or other.ctrl_or_meta is None:
            return True
        return self.ctrl_or_meta is other.ctrl_or_meta


__all__ = ["Binding"]
