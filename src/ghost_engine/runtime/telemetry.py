"""Telemetry for the document engine, built on telelog.

The engine is called on every edit and keystroke, so besides events the
module times each ``span`` and reports the ones that overrun the latency
budget (``GHOST_ENGINE_SLOW_CALL_MS``, one 60 Hz frame by default).
"""

from __future__ import annotations

import os
import time
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "GHOST_ENGINE_"
DEFAULT_LOGGER_NAME = "ghost_engine"
DEFAULT_SLOW_CALL_MS = 16.0

_PRESETS: Dict[str, Dict[str, Any]] = {
    "development": {"level": "DEBUG", "console": True, "colored": True},
    "production": {"level": "INFO", "file": "ghost_engine.log", "buffered": True},
    "performance": {
        "level": "DEBUG",
        "json": True,
        "file": "ghost_engine-performance.log",
        "buffered": True,
    },
}

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None
_SLOW_CALL_MS: Optional[float] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> bool:
    return (_env(name) or "").lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return value if isinstance(value, str) else str(value)


def _settings_from_env() -> Dict[str, Any]:
    settings: Dict[str, Any] = {
        "level": (_env("LOG_LEVEL") or "INFO").upper(),
        "console": not _env_flag("DISABLE_CONSOLE"),
        "colored": not _env_flag("NO_COLOR"),
        "json": _env_flag("LOG_JSON"),
        "file": _env("LOG_FILE"),
        "buffered": _env_flag("LOG_BUFFERED"),
    }
    if settings["buffered"]:
        settings["buffer_size"] = int(_env("LOG_BUFFER_SIZE") or "2048")
    return settings


def _build_config(settings: Dict[str, Any]) -> Any:
    config = tl.Config()
    config.with_min_level(settings["level"])
    config.with_console_output(settings.get("console", False))
    if settings.get("console"):
        config.with_colored_output(settings.get("colored", False))
    config.with_json_format(settings.get("json", False))
    if settings.get("file"):
        config.with_file_output(_env("LOG_FILE") or settings["file"])
    if settings.get("buffered"):
        config.with_buffering(True)
        if "buffer_size" in settings:
            config.with_buffer_size(settings["buffer_size"])
    config.with_profiling(True)
    return config


def _read_slow_call_ms() -> float:
    raw = _env("SLOW_CALL_MS")
    if raw is None:
        return DEFAULT_SLOW_CALL_MS
    try:
        budget = float(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}SLOW_CALL_MS must be a number, got {raw!r}") from exc
    if budget < 0:
        raise ValueError(f"{ENV_PREFIX}SLOW_CALL_MS cannot be negative, got {raw!r}")
    return budget


def configure(
    *, preset: Optional[str] = None, slow_call_ms: Optional[float] = None
) -> None:
    """Rebuild the telelog config from ``preset`` or the ``GHOST_ENGINE_*`` env.

    ``slow_call_ms`` overrides the latency budget spans are checked against.
    """

    global _ACTIVE_CONFIG, _SLOW_CALL_MS
    if preset is None:
        settings = _settings_from_env()
    else:
        try:
            settings = _PRESETS[preset.lower()]
        except KeyError:
            raise ValueError(f"Unknown preset '{preset}'.") from None

    _ACTIVE_CONFIG = _build_config(settings)
    _SLOW_CALL_MS = _read_slow_call_ms() if slow_call_ms is None else float(slow_call_ms)
    _LOGGER_CACHE.clear()


def slow_call_ms() -> float:
    if _SLOW_CALL_MS is None:
        configure()
    return cast(float, _SLOW_CALL_MS)


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` bound to the active config."""

    if _ACTIVE_CONFIG is None:
        configure()
    logger_name = name or _env("LOGGER") or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _log(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = str(level).lower()
    pairs = [(str(key), _stringify(value)) for key, value in payload.items()]
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        with_data(message, pairs)
        return
    method = getattr(logger, name, None)
    if method is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    method(f"{message} {dict(pairs)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` as key/value pairs."""

    _log(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span``; collects metadata and the measured latency."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)
    elapsed_ms: Optional[float] = None

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def payload(self, **extra: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload.update(extra)
        return payload

    def fail(self, reason: str) -> None:
        _log(self.logger, "error", "span::fail", self.payload(reason=reason))


@contextmanager
def span(
    name: str,
    *,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
    budget_ms: Optional[float] = None,
) -> Iterator[SpanHandle]:
    """Profile and time a block.

    ``metadata`` is pushed as logger context for the duration of the block.
    When the block finishes later than ``budget_ms`` (default: the configured
    slow-call budget) a ``latency.slow`` warning event is recorded.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(logger=log, span_name=name, component_name=component)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)
    context_keys = list(handle.metadata)

    started = time.perf_counter()
    with ExitStack() as stack:
        for key in context_keys:
            log.add_context(key, handle.metadata[key])
            stack.callback(log.remove_context, key)
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            handle.elapsed_ms = (time.perf_counter() - started) * 1000.0

    budget = slow_call_ms() if budget_ms is None else budget_ms
    if handle.elapsed_ms > budget:
        record_event(
            "latency.slow",
            level="warning",
            data=handle.payload(
                elapsed_ms=f"{handle.elapsed_ms:.3f}", budget_ms=f"{budget:g}"
            ),
            logger_name=logger_name,
        )


__all__ = [
    "DEFAULT_SLOW_CALL_MS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "slow_call_ms",
    "span",
]
