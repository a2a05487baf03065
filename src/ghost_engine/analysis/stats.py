"""Word, character, line and reading-time statistics for a document."""

from __future__ import annotations

from dataclasses import dataclass
from math import ceil
from typing import ClassVar, Dict

DEFAULT_WORDS_PER_MINUTE = 200


@dataclass(frozen=True, slots=True)
class Stats:
    """Immutable statistics snapshot for one version of a document."""

    words: int
    chars: int
    lines: int
    reading_time: float

    EMPTY: ClassVar["Stats"]

    def as_dict(self) -> Dict[str, float]:
        """Host-facing mapping; keys follow the editor surface's naming."""

        return {
            "words": self.words,
            "chars": self.chars,
            "lines": self.lines,
            "readingTime": self.reading_time,
        }


Stats.EMPTY = Stats(words=0, chars=0, lines=1, reading_time=0.0)


def count_lines(text: str) -> int:
    """Return ``1 + text.count("\\n")``.

    Only ``\\n`` separates lines, so ``\\r\\n`` counts once and a lone ``\\r`` is an
    ordinary character, the same rule the caret helpers in ``host.caret`` use.
    """

    return 1 + text.count("\n")


def reading_time(words: int, *, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE) -> float:
    """Whole minutes needed to read ``words``, rounded up; zero words is zero."""

    if words <= 0:
        return 0.0
    return float(ceil(words / words_per_minute))


def analyze(text: str, *, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE) -> Stats:
    if not text:
        return Stats.EMPTY
    words = len(text.split())
    return Stats(
        words=words,
        chars=len(text),
        lines=count_lines(text),
        reading_time=reading_time(words, words_per_minute=words_per_minute),
    )
