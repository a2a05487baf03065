from __future__ import annotations

import pytest

pytest.importorskip("textual")

from ghost_engine.adapters.textual import app  # noqa: E402


def test_env_reaches_the_app_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GHOST_ENGINE_TRIGGER", ";")
    monkeypatch.setenv("GHOST_ENGINE_MIN_QUERY", "3")
    monkeypatch.setenv("GHOST_ENGINE_TRANSITION_LOG", "8")
    monkeypatch.setenv("GHOST_ENGINE_UNDO_CAPACITY", "9")

    config = app.build_config(app._parse_args([]))

    assert config.trigger == ";"
    assert config.min_query_length == 3
    assert config.transition_log_size == 8
    assert config.undo_capacity == 9


def test_flags_override_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GHOST_ENGINE_UNDO_CAPACITY", "9")
    monkeypatch.setenv("GHOST_ENGINE_WPM", "300")

    config = app.build_config(app._parse_args(["--capacity", "4"]))

    assert config.undo_capacity == 4
    assert config.words_per_minute == 300


def test_bad_env_value_stops_main(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GHOST_ENGINE_WPM", "quick")
    monkeypatch.setattr(app.GhostEditorApp, "run", lambda self: pytest.fail("app ran"))

    with pytest.raises(SystemExit) as excinfo:
        app.main([])

    assert "GHOST_ENGINE_WPM" in str(excinfo.value)


def test_bad_flag_value_stops_main(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(app.GhostEditorApp, "run", lambda self: pytest.fail("app ran"))

    with pytest.raises(SystemExit) as excinfo:
        app.main(["--capacity", "0"])

    assert "undo_capacity" in str(excinfo.value)


def test_main_runs_app_with_built_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GHOST_ENGINE_TRIGGER", ";")
    started = []
    monkeypatch.setattr(
        app.GhostEditorApp, "run", lambda self: started.append(self._config)
    )

    app.main(["--wpm", "120"])

    [config] = started
    assert config.trigger == ";"
    assert config.words_per_minute == 120
