from __future__ import annotations

import pytest

from ghost_engine.keymaps import KeymapRegistry, load_default_keymaps
from ghost_engine.modes import ActionCode, EditorMode, KeyEvent
from ghost_engine.modes.state_machine import ModalInputStateMachine, classify


def make_registry() -> KeymapRegistry:
    return load_default_keymaps(KeymapRegistry())


def make_normal_machine() -> ModalInputStateMachine:
    machine = ModalInputStateMachine(registry=make_registry())
    machine.handle_key("Escape")
    return machine


def test_initial_mode_is_insert() -> None:
    assert ModalInputStateMachine().mode is EditorMode.INSERT


def test_escape_then_i_round_trip() -> None:
    machine = ModalInputStateMachine()

    escape = machine.handle_key("Escape", False)
    assert machine.mode is EditorMode.NORMAL
    assert escape.action is ActionCode.SWITCH_TO_NORMAL
    assert escape.switched

    enter = machine.handle_key("i", False)
    assert machine.mode is EditorMode.INSERT
    assert enter.action is ActionCode.SWITCH_TO_INSERT


def test_escape_ignores_modifier_state() -> None:
    machine = ModalInputStateMachine()

    transition = machine.handle_key("Escape", True)

    assert transition.action is ActionCode.SWITCH_TO_NORMAL
    assert machine.mode is EditorMode.NORMAL


@pytest.mark.parametrize(
    ("key", "action"),
    [
        ("h", ActionCode.MOVE_LEFT),
        ("l", ActionCode.MOVE_RIGHT),
        ("j", ActionCode.MOVE_DOWN),
        ("k", ActionCode.MOVE_UP),
        ("x", ActionCode.DELETE_CHAR),
    ],
)
def test_normal_mode_primitives(key: str, action: ActionCode) -> None:
    machine = make_normal_machine()

    transition = machine.handle_key(key)

    assert transition.action is action
    assert machine.mode is EditorMode.NORMAL


@pytest.mark.parametrize("key", ["h", "j", "i", "x"])
def test_normal_bindings_require_no_modifier(key: str) -> None:
    machine = make_normal_machine()

    transition = machine.handle_key(key, True)

    assert transition.action is ActionCode.NONE
    assert machine.mode is EditorMode.NORMAL


def test_normal_mode_swallows_unbound_keys() -> None:
    machine = make_normal_machine()

    for key in ("a", "H", "Escape", "Enter", "J"):
        transition = machine.handle_key(key)
        assert transition.action is ActionCode.NONE
        assert not transition.passes_through
        assert machine.mode is EditorMode.NORMAL


def test_insert_mode_passes_motion_keys_through() -> None:
    machine = ModalInputStateMachine()

    for key in ("h", "j", "k", "l", "x", "i", "a"):
        transition = machine.handle_key(key)
        assert transition.action is ActionCode.NONE
        assert transition.passes_through
        assert machine.mode is EditorMode.INSERT


def test_classify_is_pure() -> None:
    registry = make_registry()
    event = KeyEvent("j")

    first = classify(EditorMode.NORMAL, event, registry)
    second = classify(EditorMode.NORMAL, event, registry)

    assert first == second
    assert first.action is ActionCode.MOVE_DOWN
    assert first.binding_id == "normal.move_down"
    assert classify(EditorMode.INSERT, event, registry).action is ActionCode.NONE


def test_replay_is_deterministic() -> None:
    keys = ["a", "Escape", "j", ("i", True), "x", "i", "b", ("Escape", True)]
    left = ModalInputStateMachine()
    right = ModalInputStateMachine()

    left_result = left.replay(keys)
    right_result = right.replay(keys)

    assert left_result == right_result
    assert [t.action for t in left_result] == [
        ActionCode.NONE,
        ActionCode.SWITCH_TO_NORMAL,
        ActionCode.MOVE_DOWN,
        ActionCode.NONE,
        ActionCode.DELETE_CHAR,
        ActionCode.SWITCH_TO_INSERT,
        ActionCode.NONE,
        ActionCode.SWITCH_TO_NORMAL,
    ]
    assert left.mode is EditorMode.NORMAL


def test_reset_returns_to_insert_and_clears_history() -> None:
    machine = make_normal_machine()
    assert machine.history

    machine.reset()

    assert machine.mode is EditorMode.INSERT
    assert machine.history == ()
    assert machine.last_transition is None


def test_history_is_bounded() -> None:
    machine = ModalInputStateMachine(history_size=3)

    machine.replay(["a", "b", "c", "d", "e"])

    assert len(machine.history) == 3
    assert machine.last_transition is not None
