"""Normal/Insert state machine that classifies keys into action codes."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, List, Optional, Tuple, Union

from ghost_engine.keymaps.defaults import load_default_keymaps
from ghost_engine.keymaps.registry import KeymapRegistry
from ghost_engine.runtime import telemetry

from .base_mode import INITIAL_MODE, ActionCode, EditorMode, KeyEvent, Transition

KeyLike = Union[KeyEvent, str, Tuple[str, bool]]


def classify(mode: EditorMode, event: KeyEvent, registry: KeymapRegistry) -> Transition:
    """Classify ``event`` against ``mode`` without touching any state.

    Unbound keys keep the mode and yield ``ActionCode.NONE``: in Insert mode the
    host inserts the character, in Normal mode the key is swallowed.
    """

    binding = registry.lookup(mode, event)
    if binding is None:
        return Transition(previous=mode, mode=mode)
    return Transition(
        previous=mode,
        mode=binding.target_mode,
        action=binding.action,
        binding_id=binding.id,
    )


def _as_event(key: KeyLike) -> KeyEvent:
    if isinstance(key, KeyEvent):
        return key
    if isinstance(key, tuple):
        name, ctrl_or_meta = key
        return KeyEvent(key=name, ctrl_or_meta=bool(ctrl_or_meta))
    return KeyEvent(key=key)


class ModalInputStateMachine:
    """Owns the active mode and applies transitions produced by ``classify``.

    The machine never sees document text or caret position; executing the
    returned action code is the host's job.
    """

    def __init__(
        self,
        *,
        registry: KeymapRegistry | None = None,
        initial_mode: EditorMode = INITIAL_MODE,
        history_size: int = 64,
    ) -> None:
        self.registry = registry or load_default_keymaps(
            KeymapRegistry(logger_name="ghost_engine.keymaps")
        )
        self._initial = EditorMode(initial_mode)
        self._mode = self._initial
        self._history: Deque[Transition] = deque(maxlen=history_size)
        self.logger = telemetry.get_logger("ghost_engine.modes")

    @property
    def mode(self) -> EditorMode:
        return self._mode

    @property
    def history(self) -> tuple[Transition, ...]:
        return tuple(self._history)

    @property
    def last_transition(self) -> Optional[Transition]:
        return self._history[-1] if self._history else None

    def handle_key(self, key: str, ctrl_or_meta: bool = False) -> Transition:
        return self.feed(KeyEvent(key=key, ctrl_or_meta=ctrl_or_meta))

    def feed(self, event: KeyEvent) -> Transition:
        transition = classify(self._mode, event, self.registry)
        self._mode = transition.mode
        self._history.append(transition)
        if transition.switched:
            telemetry.record_event(
                "mode.switch",
                level="debug",
                data={"from": transition.previous, "mode": transition.mode},
            )
        return transition

    def replay(self, keys: Iterable[KeyLike]) -> List[Transition]:
        """Feed ``keys`` in order and return every transition produced."""

        return [self.feed(_as_event(key)) for key in keys]

    def reset(self) -> None:
        self._mode = self._initial
        self._history.clear()


__all__ = ["ModalInputStateMachine", "classify", "ActionCode", "EditorMode"]
