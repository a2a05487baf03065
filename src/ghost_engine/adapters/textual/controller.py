"""Textual-facing adapter that drives an Engine and owns the caret."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ghost_engine.analysis import Stats
from ghost_engine.completion import Suggestion, commit
from ghost_engine.config import MODE_CONFIGS
from ghost_engine.engine import Engine
from ghost_engine.host.caret import clamp
from ghost_engine.keymaps import ESCAPE_KEY
from ghost_engine.modes import ActionCode, EditorMode

_KEY_ALIASES = {
    "escape": ESCAPE_KEY,
    "ESC": ESCAPE_KEY,
    "<Esc>": ESCAPE_KEY,
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[str, int], None]
    update_stats: Callable[[Stats], None] = _noop
    update_status: Callable[[str], None] = _noop
    show_suggestion: Callable[[Optional[str]], None] = _noop
    log: Callable[[str], None] = _noop


def normalize_key(key: str, character: Optional[str] = None) -> str:
    if key in _KEY_ALIASES:
        return _KEY_ALIASES[key]
    if character and len(character) == 1 and character.isprintable():
        return character
    return key


class TextualEngineAdapter:
    """Forwards keys to the engine and executes the action codes it returns.

    The engine classifies; this adapter plays the host role: it keeps the caret,
    inserts text in Insert mode and runs caret arithmetic for motions.
    """

    def __init__(self, engine: Engine, hooks: TextualUIHooks) -> None:
        self.engine = engine
        self.hooks = hooks
        self.caret = 0
        self._suggestion: Optional[Suggestion] = None
        self._refresh()
        self.hooks.update_status(self._mode_label())

    @property
    def suggestion(self) -> Optional[Suggestion]:
        return self._suggestion

    def handle_textual_key(
        self,
        key: str,
        *,
        character: Optional[str] = None,
        ctrl_or_meta: bool = False,
    ) -> ActionCode:
        name = normalize_key(key, character)
        self._log_state("key ->", key=name, ctrl_or_meta=ctrl_or_meta)
        previous_mode = self.engine.mode
        action = self.engine.handle_key(name, ctrl_or_meta)

        if action.is_motion or action is ActionCode.DELETE_CHAR:
            edit = self.engine.apply_action(self.caret, action)
            self.caret = edit.caret
        elif action.is_mode_switch:
            self.hooks.update_status(self._mode_label())
        elif previous_mode is EditorMode.INSERT and not ctrl_or_meta:
            self._insert_key(name, character)

        self._refresh()
        self._log_state("result <-", action=action.value)
        return action

    def handle_text_change(self, text: str, caret: Optional[int] = None) -> None:
        """Adopt an edit made outside the key path (paste, IME, widget edit)."""

        self.engine.update_content(text)
        self.caret = clamp(text, len(text) if caret is None else caret)
        self._refresh()

    def accept_suggestion(self) -> bool:
        suggestion = self._suggestion
        if suggestion is None:
            return False
        text = self.engine.content
        head = commit(text[: self.caret], suggestion)
        self.engine.update_content(head + text[self.caret :])
        self.caret = len(head)
        self._refresh()
        return True

    def undo(self) -> str:
        restored = self.engine.undo()
        self.caret = clamp(restored, self.caret)
        self._refresh()
        return restored

    def _insert_key(self, name: str, character: Optional[str]) -> None:
        text = self.engine.content
        if name in {"enter", "return"}:
            insert = "\n"
        elif name == "tab":
            insert = "\t"
        elif name == "backspace":
            if self.caret == 0:
                return
            self.engine.update_content(text[: self.caret - 1] + text[self.caret :])
            self.caret -= 1
            return
        elif character and len(character) == 1 and character.isprintable():
            insert = character
        else:
            return
        self.engine.update_content(text[: self.caret] + insert + text[self.caret :])
        self.caret += len(insert)

    def _refresh(self) -> None:
        text = self.engine.content
        self.caret = clamp(text, self.caret)
        self.hooks.update_buffer(text, self.caret)
        self.hooks.update_stats(self.engine.analyze())
        suggestion = None
        if self.engine.mode is EditorMode.INSERT:
            suggestion = self.engine.matcher.suggest_in(text[: self.caret])
        if suggestion != self._suggestion:
            self._suggestion = suggestion
            self.hooks.show_suggestion(suggestion.glyph if suggestion else None)

    def _mode_label(self) -> str:
        return MODE_CONFIGS[self.engine.mode].label

    def _log_state(self, prefix: str, **fields: object) -> None:
        try:
            snapshot = self._state_metadata()
            snapshot.update({k: v for k, v in fields.items() if v is not None})
            parts = [prefix]
            for key, value in snapshot.items():
                parts.append(f"{key}={value!r}")
            self.hooks.log(" ".join(parts))
        except Exception:  # a broken log sink must never cost a keystroke
            pass

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "mode": self.engine.mode.value,
            "caret": self.caret,
            "version": self.engine.version,
            "undo_depth": self.engine.undo_depth,
        }


__all__ = ["TextualEngineAdapter", "TextualUIHooks", "normalize_key"]
