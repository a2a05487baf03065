"""Trigger-based token completion."""

from .aliases import DEFAULT_ALIASES, DEFAULT_TRIGGER
from .matcher import AutocompleteMatcher, Suggestion, commit, trailing_token

__all__ = [
    "AutocompleteMatcher",
    "Suggestion",
    "DEFAULT_ALIASES",
    "DEFAULT_TRIGGER",
    "commit",
    "trailing_token",
]
