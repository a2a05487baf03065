from __future__ import annotations

import pytest

from ghost_engine.analysis import Stats, analyze, count_lines, reading_time


def test_empty_text_has_one_line_and_nothing_else() -> None:
    assert analyze("") == Stats(words=0, chars=0, lines=1, reading_time=0.0)


def test_two_words_round_up_to_one_minute() -> None:
    stats = analyze("hello world")

    assert stats.words == 2
    assert stats.chars == 11
    assert stats.lines == 1
    assert stats.reading_time == 1.0


def test_lines_count_line_breaks() -> None:
    assert analyze("a\nb\nc").lines == 3
    assert analyze("trailing\n").lines == 2
    assert count_lines("crlf\r\nline") == 2
    assert count_lines("old\rmac") == 1


def test_whitespace_only_text_has_no_words() -> None:
    stats = analyze("  \t\n  ")

    assert stats.words == 0
    assert stats.reading_time == 0.0
    assert stats.lines == 2


@pytest.mark.parametrize(
    "text",
    ["", "x", "héllo wörld", "emoji \U0001F47B ghost", "tabs\tand\nnewlines\r\n"],
)
def test_chars_equals_length(text: str) -> None:
    assert analyze(text).chars == len(text)


def test_reading_time_boundaries() -> None:
    assert reading_time(0) == 0.0
    assert reading_time(1) == 1.0
    assert reading_time(200) == 1.0
    assert reading_time(201) == 2.0
    assert reading_time(100, words_per_minute=50) == 2.0


def test_large_document_counts_every_word() -> None:
    text = "word " * 1000

    stats = analyze(text)

    assert stats.words == 1000
    assert stats.reading_time == 5.0


def test_analyze_is_idempotent() -> None:
    text = "one two\nthree"

    assert analyze(text) == analyze(text)


def test_as_dict_uses_host_keys() -> None:
    assert analyze("hi").as_dict() == {
        "words": 1,
        "chars": 2,
        "lines": 1,
        "readingTime": 1.0,
    }
