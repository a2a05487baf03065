from __future__ import annotations

from typing import List, Optional

from ghost_engine import Engine, Stats
from ghost_engine.adapters.textual import TextualEngineAdapter, TextualUIHooks, normalize_key
from ghost_engine.completion import DEFAULT_ALIASES
from ghost_engine.modes import ActionCode, EditorMode


class Recorder:
    def __init__(self) -> None:
        self.buffers: List[tuple[str, int]] = []
        self.stats: List[Stats] = []
        self.statuses: List[str] = []
        self.suggestions: List[Optional[str]] = []
        self.logs: List[str] = []

    def hooks(self) -> TextualUIHooks:
        return TextualUIHooks(
            update_buffer=lambda text, caret: self.buffers.append((text, caret)),
            update_stats=self.stats.append,
            update_status=self.statuses.append,
            show_suggestion=self.suggestions.append,
            log=self.logs.append,
        )


def make_adapter() -> tuple[TextualEngineAdapter, Recorder]:
    recorder = Recorder()
    adapter = TextualEngineAdapter(Engine.create(), recorder.hooks())
    return adapter, recorder


def type_text(adapter: TextualEngineAdapter, text: str) -> None:
    for char in text:
        if char == "\n":
            adapter.handle_textual_key("enter", character="\r")
        else:
            adapter.handle_textual_key(char, character=char)


def test_normalize_key() -> None:
    assert normalize_key("escape") == "Escape"
    assert normalize_key("ESC") == "Escape"
    assert normalize_key("j", "j") == "j"
    assert normalize_key("enter", "\r") == "enter"


def test_typing_in_insert_mode_updates_buffer_and_stats() -> None:
    adapter, recorder = make_adapter()

    type_text(adapter, "hi there")

    assert adapter.engine.content == "hi there"
    assert recorder.buffers[-1] == ("hi there", 8)
    assert recorder.stats[-1].words == 2
    assert recorder.statuses[0] == "INSERT"


def test_escape_and_motion_keys_move_caret_without_editing() -> None:
    adapter, recorder = make_adapter()
    type_text(adapter, "ab\ncd")

    assert adapter.handle_textual_key("escape") is ActionCode.SWITCH_TO_NORMAL
    assert recorder.statuses[-1] == "NORMAL"
    adapter.handle_textual_key("k", character="k")
    adapter.handle_textual_key("h", character="h")

    assert adapter.engine.content == "ab\ncd"
    assert adapter.caret == 1
    assert adapter.engine.mode is EditorMode.NORMAL


def test_delete_char_in_normal_mode_is_undoable() -> None:
    adapter, _ = make_adapter()
    type_text(adapter, "abc")
    adapter.handle_textual_key("escape")
    adapter.handle_textual_key("h", character="h")
    adapter.handle_textual_key("h", character="h")

    adapter.handle_textual_key("x", character="x")
    assert adapter.engine.content == "ac"

    assert adapter.undo() == "abc"


def test_normal_mode_swallows_text() -> None:
    adapter, _ = make_adapter()
    adapter.handle_textual_key("escape")

    adapter.handle_textual_key("q", character="q")

    assert adapter.engine.content == ""


def test_ctrl_keys_do_not_insert_in_insert_mode() -> None:
    adapter, _ = make_adapter()

    adapter.handle_textual_key("k", character="k", ctrl_or_meta=True)

    assert adapter.engine.content == ""


def test_backspace_removes_previous_character() -> None:
    adapter, _ = make_adapter()
    type_text(adapter, "ok")

    adapter.handle_textual_key("backspace")

    assert adapter.engine.content == "o"
    assert adapter.caret == 1


def test_suggestion_is_offered_and_committed() -> None:
    adapter, recorder = make_adapter()
    type_text(adapter, "hey :sm")

    assert recorder.suggestions[-1] == DEFAULT_ALIASES["smile"]
    assert adapter.accept_suggestion()

    assert adapter.engine.content == f"hey {DEFAULT_ALIASES['smile']} "
    assert adapter.caret == len(adapter.engine.content)
    assert recorder.suggestions[-1] is None
    assert not adapter.accept_suggestion()


def test_external_text_change_goes_through_history() -> None:
    adapter, recorder = make_adapter()

    adapter.handle_text_change("pasted text")

    assert adapter.caret == len("pasted text")
    assert recorder.stats[-1].words == 2
    assert adapter.undo() == ""
    assert adapter.caret == 0


def test_adapter_emits_log_lines() -> None:
    adapter, recorder = make_adapter()

    adapter.handle_textual_key("a", character="a")

    assert any(line.startswith("key ->") for line in recorder.logs)
    assert any("action='none'" in line for line in recorder.logs)
