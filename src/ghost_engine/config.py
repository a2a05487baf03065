"""Engine configuration and per-mode display constants."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from ghost_engine.completion.aliases import DEFAULT_ALIASES
from ghost_engine.modes.base_mode import EditorMode

ENV_PREFIX = "GHOST_ENGINE_"
_INT_FIELDS = (
    "undo_capacity",
    "words_per_minute",
    "min_query_length",
    "transition_log_size",
)


class EngineConfigError(ValueError):
    """Raised when a configuration value cannot drive a working engine."""

    def __init__(self, message: str, *, field_name: str | None = None) -> None:
        super().__init__(message)
        self.field_name = field_name


@dataclass(frozen=True)
class ModeConfig:
    """How a host should label a mode."""

    label: str
    inserts_text: bool


MODE_CONFIGS = {
    EditorMode.NORMAL: ModeConfig("NORMAL", False),
    EditorMode.INSERT: ModeConfig("INSERT", True),
}


def _env_int(name: str, fallback: int) -> int:
    raw = os.getenv(f"{ENV_PREFIX}{name}")
    if raw is None:
        return fallback
    try:
        return int(raw)
    except ValueError as exc:
        raise EngineConfigError(
            f"{ENV_PREFIX}{name} must be an integer, got {raw!r}", field_name=name
        ) from exc


@dataclass(frozen=True)
class EngineConfig:
    undo_capacity: int = 100
    words_per_minute: int = 200
    trigger: str = ":"
    min_query_length: int = 2
    aliases: Mapping[str, str] = field(default_factory=lambda: DEFAULT_ALIASES)
    transition_log_size: int = 64

    def __post_init__(self) -> None:
        object.__setattr__(self, "aliases", MappingProxyType(dict(self.aliases)))

    @classmethod
    def from_env(cls, *, aliases: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """Build a config from ``GHOST_ENGINE_*`` variables, falling back to defaults."""

        defaults = cls()
        return cls(
            undo_capacity=_env_int("UNDO_CAPACITY", defaults.undo_capacity),
            words_per_minute=_env_int("WPM", defaults.words_per_minute),
            trigger=os.getenv(f"{ENV_PREFIX}TRIGGER", defaults.trigger),
            min_query_length=_env_int("MIN_QUERY", defaults.min_query_length),
            aliases=aliases if aliases is not None else defaults.aliases,
            transition_log_size=_env_int(
                "TRANSITION_LOG", defaults.transition_log_size
            ),
        )

    def validate(self) -> "EngineConfig":
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise EngineConfigError(
                    f"{name} must be an integer, got {value!r}", field_name=name
                )
        if self.undo_capacity < 1:
            raise EngineConfigError(
                "undo_capacity must be at least 1", field_name="undo_capacity"
            )
        if self.words_per_minute < 1:
            raise EngineConfigError(
                "words_per_minute must be at least 1", field_name="words_per_minute"
            )
        if (
            not isinstance(self.trigger, str)
            or len(self.trigger) != 1
            or self.trigger.isspace()
        ):
            raise EngineConfigError(
                "trigger must be a single non-whitespace character",
                field_name="trigger",
            )
        if self.min_query_length < 1:
            raise EngineConfigError(
                "min_query_length must be at least 1", field_name="min_query_length"
            )
        if self.transition_log_size < 0:
            raise EngineConfigError(
                "transition_log_size cannot be negative",
                field_name="transition_log_size",
            )
        for alias, glyph in self.aliases.items():
            if not (isinstance(alias, str) and isinstance(glyph, str)):
                raise EngineConfigError(
                    f"alias table entry {alias!r} -> {glyph!r} must map text to text",
                    field_name="aliases",
                )
            if not alias or not glyph:
                raise EngineConfigError(
                    f"alias table entry {alias!r} -> {glyph!r} is empty",
                    field_name="aliases",
                )
        return self


__all__ = [
    "EngineConfig",
    "EngineConfigError",
    "ModeConfig",
    "MODE_CONFIGS",
]
