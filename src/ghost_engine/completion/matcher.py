"""Resolve a partial ``:alias`` token to at most one suggestion."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .aliases import DEFAULT_ALIASES, DEFAULT_TRIGGER


@dataclass(frozen=True, slots=True)
class Suggestion:
    alias: str
    glyph: str
    trigger: str = DEFAULT_TRIGGER

    @property
    def token(self) -> str:
        return f"{self.trigger}{self.alias}"


def trailing_token(text: str) -> str:
    """Return the final whitespace-delimited run of ``text`` ("" after whitespace)."""

    if not text or text[-1].isspace():
        return ""
    parts = text.rsplit(None, 1)
    return parts[-1] if parts else ""


def commit(text: str, suggestion: Suggestion) -> str:
    """Replace the trailing token of ``text`` with the glyph plus one space."""

    token = trailing_token(text)
    head = text[: len(text) - len(token)]
    return f"{head}{suggestion.glyph} "


class AutocompleteMatcher:
    """Case-sensitive exact-then-prefix matcher over a fixed alias table.

    Prefix ties resolve to the shortest alias, then lexicographic order, so the
    same token always yields the same suggestion.
    """

    def __init__(
        self,
        aliases: Mapping[str, str] = DEFAULT_ALIASES,
        *,
        trigger: str = DEFAULT_TRIGGER,
        min_query_length: int = 2,
    ) -> None:
        self.trigger = trigger
        self.min_query_length = min_query_length
        self._aliases = dict(aliases)
        self._ordered = sorted(self._aliases, key=lambda alias: (len(alias), alias))

    def __len__(self) -> int:
        return len(self._aliases)

    def __contains__(self, alias: object) -> bool:
        return alias in self._aliases

    def query_for(self, token: object) -> Optional[str]:
        """Return the alias query inside ``token`` or None when ineligible."""

        if not isinstance(token, str) or not token.startswith(self.trigger):
            return None
        query = token[len(self.trigger) :]
        if len(query) < self.min_query_length:
            return None
        return query

    def suggest_for(self, token: object) -> Optional[Suggestion]:
        query = self.query_for(token)
        if query is None:
            return None
        glyph = self._aliases.get(query)
        if glyph is not None:
            return Suggestion(alias=query, glyph=glyph, trigger=self.trigger)
        for alias in self._ordered:
            if alias.startswith(query):
                return Suggestion(
                    alias=alias, glyph=self._aliases[alias], trigger=self.trigger
                )
        return None

    def suggest_in(self, text: str) -> Optional[Suggestion]:
        """Match against the trailing token of a whole document."""

        if not isinstance(text, str):
            return None
        return self.suggest_for(trailing_token(text))


__all__ = ["AutocompleteMatcher", "Suggestion", "commit", "trailing_token"]
