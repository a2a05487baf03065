"""Derived document statistics."""

from .stats import DEFAULT_WORDS_PER_MINUTE, Stats, analyze, count_lines, reading_time

__all__ = [
    "DEFAULT_WORDS_PER_MINUTE",
    "Stats",
    "analyze",
    "count_lines",
    "reading_time",
]
