from __future__ import annotations

import threading
from typing import Optional

from langcipher.core.errors import InvalidLanguageError
from langcipher.core.results import FrequencyEntry, LanguageProfile, Lookup
from langcipher.core.utils import is_symbolic_key


def _recompute(table: dict[str, FrequencyEntry]) -> None:
    total = sum(e.absolute for e in table.values())
    for e in table.values():
        e.percent = (e.absolute / total) * 100.0 if total > 0 else 0.0


class MemoryFrequencyStore:
    """Process-local store; increments are atomic under a single lock."""

    def __init__(self, profiles: Optional[dict[str, LanguageProfile]] = None) -> None:
        self._profiles: dict[str, LanguageProfile] = dict(profiles or {})
        self._lock = threading.RLock()

    def _profile(self, language: str) -> LanguageProfile:
        if not language or not language.strip():
            raise InvalidLanguageError("Language name cannot be empty.")
        prof = self._profiles.get(language)
        if prof is None:
            prof = LanguageProfile(language=language)
            self._profiles[language] = prof
        return prof

    @staticmethod
    def _bump(table: dict[str, FrequencyEntry], token: str, delta: int) -> None:
        if delta < 0:
            raise ValueError(f"Increment for {token!r} must be non-negative, got {delta}.")
        entry = table.get(token)
        if entry is None:
            table[token] = FrequencyEntry(absolute=delta)
        else:
            entry.absolute += delta

    def increment_word_frequency(self, language: str, word: str, delta: int) -> None:
        with self._lock:
            self._bump(self._profile(language).words, word, delta)

    def increment_char_frequency(self, language: str, char_key: str, delta: int) -> None:
        with self._lock:
            self._bump(self._profile(language).chars, char_key, delta)

    def recompute_word_percentages(self, language: str) -> None:
        with self._lock:
            _recompute(self._profile(language).words)

    def recompute_char_percentages(self, language: str) -> None:
        with self._lock:
            _recompute(self._profile(language).chars)

    def _get(self, language: str, table: str, token: str) -> Lookup:
        with self._lock:
            prof = self._profiles.get(language)
            if prof is None:
                return Lookup.missing()
            entry = getattr(prof, table).get(token)
            if entry is None:
                return Lookup.missing()
            return Lookup.found(repr(entry.percent))

    def get_word_percentage(self, language: str, word: str) -> Lookup:
        return self._get(language, "words", word)

    def get_char_percentage(self, language: str, char_key: str) -> Lookup:
        return self._get(language, "chars", char_key)

    def list_languages(self) -> set[str]:
        with self._lock:
            return set(self._profiles)

    def get_most_frequent_char(self, language: str) -> Lookup:
        """
        Highest-count character; letters outrank digits and punctuation so the
        result can serve as a crack reference. Symbolic whitespace keys never qualify.
        """
        with self._lock:
            prof = self._profiles.get(language)
            if prof is None:
                return Lookup.missing()
            best: Optional[tuple[tuple[bool, int], str]] = None
            for key, entry in prof.chars.items():
                if is_symbolic_key(key) or entry.absolute <= 0:
                    continue
                rank = (key.isalpha(), entry.absolute)
                if best is None or rank > best[0]:
                    best = (rank, key)
            if best is None:
                return Lookup.missing()
            return Lookup.found(best[1])

    def profile(self, language: str) -> Optional[LanguageProfile]:
        with self._lock:
            return self._profiles.get(language)
