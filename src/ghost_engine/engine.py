"""Composition root: one document, one undo history, one modal state machine."""

from __future__ import annotations

from typing import Optional

from ghost_engine.analysis import Stats, analyze
from ghost_engine.buffer import BufferDocument, Snapshot, UndoHistory
from ghost_engine.completion import AutocompleteMatcher
from ghost_engine.config import EngineConfig
from ghost_engine.host.caret import CaretEdit, apply_action, clamp
from ghost_engine.keymaps import KeymapConflictError
from ghost_engine.modes import ActionCode, EditorMode
from ghost_engine.modes.state_machine import ModalInputStateMachine
from ghost_engine.runtime import telemetry


class EngineInitError(RuntimeError):
    """The only error the engine surfaces: it could not be constructed."""


class Engine:
    """Request/response surface the host calls on every edit and keystroke.

    Undo policy: ``undo()`` adopts the restored text as the current document
    without recording a new snapshot, so ``n`` undos reverse ``n`` updates.
    Every ``update_content`` call records a snapshot, identical text included.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = (config or EngineConfig()).validate()
        self.document = BufferDocument()
        self.history = UndoHistory(self.config.undo_capacity)
        self.modes = ModalInputStateMachine(
            history_size=self.config.transition_log_size
        )
        self.matcher = AutocompleteMatcher(
            self.config.aliases,
            trigger=self.config.trigger,
            min_query_length=self.config.min_query_length,
        )
        self.logger = telemetry.get_logger("ghost_engine.engine")
        self._stats: Optional[tuple[int, Stats]] = None
        self._closed = False

    @classmethod
    def create(cls, config: EngineConfig | None = None) -> "Engine":
        try:
            engine = cls(config)
        except (ValueError, TypeError, KeymapConflictError) as exc:
            telemetry.record_event(
                "engine.init_failed", level="error", data={"reason": str(exc)}
            )
            raise EngineInitError(f"engine failed to initialize: {exc}") from exc
        telemetry.record_event(
            "engine.created",
            level="debug",
            data={"undo_capacity": engine.config.undo_capacity},
        )
        return engine

    def __enter__(self) -> "Engine":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def close(self) -> None:
        """Release the undo history and stop accepting input.

        Afterwards edits and keys are ignored, ``undo`` returns the current
        content and ``handle_key`` yields ``ActionCode.NONE``. Reads still work.
        """

        if self._closed:
            return
        self.history.clear()
        self._stats = None
        self._closed = True
        telemetry.record_event("engine.closed", level="debug")

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def content(self) -> str:
        return self.document.text

    @property
    def version(self) -> int:
        return self.document.version

    @property
    def mode(self) -> EditorMode:
        return self.modes.mode

    @property
    def can_undo(self) -> bool:
        return not self.history.is_empty

    @property
    def undo_depth(self) -> int:
        return len(self.history)

    def update_content(self, text: str) -> None:
        if self._closed:
            telemetry.record_event("engine.closed_update", level="debug")
            return
        with telemetry.span(
            "engine::update_content",
            component="engine",
            metadata={"version": self.document.version, "length": len(text)},
        ):
            self.history.push(
                Snapshot(text=self.document.text, version=self.document.version)
            )
            self.document.replace(text)

    def analyze(self) -> Stats:
        version = self.document.version
        if self._stats is not None and self._stats[0] == version:
            return self._stats[1]
        stats = analyze(
            self.document.text, words_per_minute=self.config.words_per_minute
        )
        self._stats = (version, stats)
        return stats

    def undo(self) -> str:
        if self._closed or self.history.is_empty:
            telemetry.record_event("undo.empty", level="debug")
            return self.document.text
        restored = self.history.pop(self.document.text)
        self.document.replace(restored)
        return restored

    def suggest_emoji(self, query: str) -> Optional[str]:
        suggestion = self.matcher.suggest_for(query)
        return suggestion.glyph if suggestion is not None else None

    def handle_key(self, key: str, ctrl_or_meta: bool = False) -> ActionCode:
        if self._closed:
            return ActionCode.NONE
        with telemetry.span(
            "engine::handle_key",
            component="engine",
            metadata={"key": key, "mode": self.modes.mode},
        ) as handle:
            transition = self.modes.handle_key(key, ctrl_or_meta)
            handle.add_metadata("action", transition.action)
            return transition.action

    def apply_action(self, caret: int, action: ActionCode) -> CaretEdit:
        """Run caret arithmetic on the current content for ``action``.

        Text-changing actions go through ``update_content`` so they can be undone.
        """

        text = self.document.text
        if self._closed:
            return CaretEdit(text=text, caret=clamp(text, caret))
        edit = apply_action(text, caret, action)
        if edit.changed:
            self.update_content(edit.text)
        return edit


__all__ = ["Engine", "EngineInitError"]
