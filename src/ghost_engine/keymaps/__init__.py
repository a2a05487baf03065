"""Declarative keymap table and default bindings."""

from .models import Binding
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .defaults import DEFAULT_BINDINGS, ESCAPE_KEY, load_default_keymaps

__all__ = [
    "Binding",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "DEFAULT_BINDINGS",
    "ESCAPE_KEY",
    "load_default_keymaps",
]
