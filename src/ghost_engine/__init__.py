"""Plain-text document engine for modal editor surfaces."""

from ghost_engine.analysis import Stats, analyze
from ghost_engine.config import EngineConfig, EngineConfigError
from ghost_engine.engine import Engine, EngineInitError
from ghost_engine.modes import ActionCode, EditorMode, KeyEvent

__all__ = [
    "ActionCode",
    "EditorMode",
    "Engine",
    "EngineConfig",
    "EngineConfigError",
    "EngineInitError",
    "KeyEvent",
    "Stats",
    "analyze",
    "adapters",
    "analysis",
    "buffer",
    "completion",
    "host",
    "keymaps",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
