"""Frequency store backed by a hosted Supabase (PostgREST) database.

Expects tables ``words`` and ``characters`` with ``language``, ``word`` /
``character`` and ``%_freq`` columns, plus the RPC functions named below.
The percentage arithmetic happens server-side.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from supabase import Client, create_client

from langcipher.core.config import Settings
from langcipher.core.errors import StoreUnavailableError
from langcipher.core.results import Lookup

from .base import PERCENT_FREQ_PROPERTY

logger = logging.getLogger(__name__)

_RPC_INCREMENT_WORD = "increment_word_abs_freq"
_RPC_INCREMENT_CHAR = "increment_character_abs_freq"
_RPC_UPDATE_WORDS = "update_all_words_percent_freq"
_RPC_UPDATE_CHARS = "update_all_characters_percent_freq"
_RPC_MOST_FREQUENT_CHAR = "get_most_frequent_char"
_RPC_LANGUAGES = "get_languages"


def _rows(res: Any) -> list[dict[str, Any]]:
    data = getattr(res, "data", None)
    if isinstance(data, list):
        return [r for r in data if isinstance(r, dict)]
    if isinstance(data, dict) and data:
        return [data]
    return []


class SupabaseFrequencyStore:
    def __init__(self, client: Client) -> None:
        self._sb = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseFrequencyStore":
        if not settings.supabase_url or not settings.supabase_key:
            raise StoreUnavailableError(
                "Supabase client not configured. Set SUPABASE_URL and SUPABASE_KEY in the environment or a .env file."
            )
        try:
            client = create_client(settings.supabase_url, settings.supabase_key)
        except Exception as e:
            raise StoreUnavailableError(f"Could not create Supabase client: {e}") from e
        return cls(client)

    # ---------------------------------------------------------------------
    # INTERNAL HELPERS
    # ---------------------------------------------------------------------
    def _rpc(self, fn: str, params: Optional[dict[str, Any]] = None) -> Any:
        try:
            return self._sb.rpc(fn, params or {}).execute()
        except Exception as e:
            raise StoreUnavailableError(f"Supabase RPC {fn} failed: {e}") from e

    def _property(self, table: str, column: str, language: str, token: str) -> Lookup:
        try:
            res = (
                self._sb.table(table)
                .select("*")
                .ilike("language", language.strip())
                .eq(column, token)
                .execute()
            )
        except Exception as e:
            logger.debug("lookup %s.%s=%r for %s failed: %s", table, column, token, language, e)
            return Lookup.transient(e)

        rows = _rows(res)
        if not rows:
            return Lookup.missing()
        value = rows[0].get(PERCENT_FREQ_PROPERTY)
        if value is None:
            return Lookup.missing()
        return Lookup.found(value)

    # ---------------------------------------------------------------------
    # WRITES
    # ---------------------------------------------------------------------
    def increment_word_frequency(self, language: str, word: str, delta: int) -> None:
        self._rpc(_RPC_INCREMENT_WORD, {"lang": language, "wrd": word, "increment_by": delta})

    def increment_char_frequency(self, language: str, char_key: str, delta: int) -> None:
        self._rpc(_RPC_INCREMENT_CHAR, {"lang_input": language, "char_input": char_key, "increment_by": delta})

    def recompute_word_percentages(self, language: str) -> None:
        self._rpc(_RPC_UPDATE_WORDS, {"language_input": language})

    def recompute_char_percentages(self, language: str) -> None:
        self._rpc(_RPC_UPDATE_CHARS, {"language_input": language})

    # ---------------------------------------------------------------------
    # READS
    # ---------------------------------------------------------------------
    def get_word_percentage(self, language: str, word: str) -> Lookup:
        return self._property("words", "word", language, word)

    def get_char_percentage(self, language: str, char_key: str) -> Lookup:
        return self._property("characters", "character", language, char_key)

    def list_languages(self) -> set[str]:
        rows = _rows(self._rpc(_RPC_LANGUAGES))
        return {str(r["language"]) for r in rows if r.get("language")}

    def get_most_frequent_char(self, language: str) -> Lookup:
        try:
            res = self._rpc(_RPC_MOST_FREQUENT_CHAR, {"language_input": language})
        except StoreUnavailableError as e:
            return Lookup.transient(e)
        rows = _rows(res)
        if not rows or not rows[0].get("character"):
            return Lookup.missing()
        return Lookup.found(str(rows[0]["character"]))
