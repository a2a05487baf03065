"""Executable Textual app that hosts the document engine."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, replace
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use ghost_engine.adapters.textual.app"
    ) from exc

from ghost_engine.analysis import Stats
from ghost_engine.config import EngineConfig, EngineConfigError
from ghost_engine.engine import Engine
from ghost_engine.runtime import telemetry

from .controller import TextualEngineAdapter, TextualUIHooks

CARET = "▏"
_CTRL_PREFIXES = ("ctrl+", "meta+", "super+")


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""
    stats_text: str = ""
    suggestion: Optional[str] = None


def format_stats(stats: Stats) -> str:
    return (
        f"words {stats.words}  chars {stats.chars}  lines {stats.lines}  "
        f"read {stats.reading_time:.1f}m"
    )


class GhostEditorApp(App[None]):
    """Minimal Textual UI embedding the engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#stats-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, config: EngineConfig | None = None) -> None:
        super().__init__()
        self._state = UIState()
        self._config = config
        self.engine: Engine | None = None
        self.adapter: TextualEngineAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._stats_widget: Static | None = None
        self.logger = telemetry.get_logger("ghost_engine.app")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view", markup=False)
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        self._stats_widget = Static("", id="stats-line")
        yield self._status_widget
        yield self._stats_widget
        yield Footer()

    def on_mount(self) -> None:
        self.engine = Engine.create(self._config)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_stats=self._update_stats,
            update_status=self._update_status,
            show_suggestion=self._show_suggestion,
            log=self._log_line,
        )
        self.adapter = TextualEngineAdapter(self.engine, hooks)

    def on_unmount(self) -> None:
        if self.engine:
            self.engine.close()

    def action_undo(self) -> None:
        if self.adapter:
            self.adapter.undo()

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        key = event.key
        if key == "ctrl+q":
            return
        if key == "ctrl+z":
            self.action_undo()
            event.stop()
            return
        if key == "tab" and self.adapter.accept_suggestion():
            event.stop()
            event.prevent_default()
            return
        ctrl_or_meta = key.startswith(_CTRL_PREFIXES)
        if ctrl_or_meta:
            key = key.split("+")[-1]
        self.adapter.handle_textual_key(
            key, character=event.character, ctrl_or_meta=ctrl_or_meta
        )
        event.stop()
        event.prevent_default()

    def _update_buffer(self, text: str, caret: int) -> None:
        self._state.buffer_text = text
        if self._buffer_widget:
            self._buffer_widget.update(text[:caret] + CARET + text[caret:])

    def _update_stats(self, stats: Stats) -> None:
        self._state.stats_text = format_stats(stats)
        self._render_footer()

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_suggestion(self, glyph: Optional[str]) -> None:
        self._state.suggestion = glyph
        self._render_footer()

    def _render_footer(self) -> None:
        if not self._stats_widget:
            return
        line = self._state.stats_text
        if self._state.suggestion:
            line = f"{line}  tab -> {self._state.suggestion}"
        self._stats_widget.update(line)

    def _log_line(self, line: str) -> None:
        self.logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the ghost editor demo.")
    parser.add_argument(
        "--capacity",
        type=int,
        default=None,
        help="Undo history capacity (default: $GHOST_ENGINE_UNDO_CAPACITY or 100)",
    )
    parser.add_argument(
        "--wpm",
        type=int,
        default=None,
        help="Reading speed for the reading-time estimate (default: $GHOST_ENGINE_WPM or 200)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="Telemetry preset to apply before starting",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> EngineConfig:
    """Layer the command-line flags that were given over ``EngineConfig.from_env()``."""

    overrides = {
        name: value
        for name, value in (
            ("undo_capacity", args.capacity),
            ("words_per_minute", args.wpm),
        )
        if value is not None
    }
    return replace(EngineConfig.from_env(), **overrides).validate()


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    try:
        config = build_config(args)
    except EngineConfigError as exc:
        raise SystemExit(f"ghost-editor: {exc}") from exc
    app = GhostEditorApp(config=config)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
