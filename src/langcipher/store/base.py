from __future__ import annotations

from typing import Protocol

from langcipher.core.results import Lookup

# Column holding the relative frequency in the hosted tables.
PERCENT_FREQ_PROPERTY = "%_freq"


class FrequencyStore(Protocol):
    """Durable (language, token) -> absolute count / relative percentage mapping."""

    def increment_word_frequency(self, language: str, word: str, delta: int) -> None:
        ...

    def increment_char_frequency(self, language: str, char_key: str, delta: int) -> None:
        ...

    def recompute_word_percentages(self, language: str) -> None:
        ...

    def recompute_char_percentages(self, language: str) -> None:
        ...

    def get_word_percentage(self, language: str, word: str) -> Lookup:
        ...

    def get_char_percentage(self, language: str, char_key: str) -> Lookup:
        ...

    def list_languages(self) -> set[str]:
        ...

    def get_most_frequent_char(self, language: str) -> Lookup:
        ...
