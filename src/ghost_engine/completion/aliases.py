"""Default alias table for ``:alias`` emoji completion."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

DEFAULT_TRIGGER = ":"

DEFAULT_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "smile": "\U0001F604",
        "smiley": "\U0001F603",
        "grin": "\U0001F601",
        "joy": "\U0001F602",
        "wink": "\U0001F609",
        "heart": "❤️",
        "fire": "\U0001F525",
        "rocket": "\U0001F680",
        "thumbsup": "\U0001F44D",
        "thumbsdown": "\U0001F44E",
        "tada": "\U0001F389",
        "zap": "⚡",
        "clock": "\U0001F552",
        "sparkles": "✨",
        "ghost": "\U0001F47B",
        "star": "⭐",
        "check": "✅",
        "cross": "❌",
        "warning": "⚠️",
        "bulb": "\U0001F4A1",
        "memo": "\U0001F4DD",
        "eyes": "\U0001F440",
        "wave": "\U0001F44B",
        "coffee": "☕",
        "bug": "\U0001F41B",
    }
)

__all__ = ["DEFAULT_ALIASES", "DEFAULT_TRIGGER"]
