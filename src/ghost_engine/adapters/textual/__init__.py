"""Textual host adapter; the demo app lives in ``app`` and needs ``textual``."""

from .controller import TextualEngineAdapter, TextualUIHooks, normalize_key

__all__ = ["TextualEngineAdapter", "TextualUIHooks", "normalize_key"]
