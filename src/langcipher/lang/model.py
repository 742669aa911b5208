from __future__ import annotations

import logging
from collections import Counter
from typing import Callable, Optional, Sequence

from langcipher.core.errors import (
    InvalidFormatError,
    InvalidLanguageError,
    LangCipherError,
    StoreUnavailableError,
)
from langcipher.core.results import LanguageScore, Lookup, LookupStatus, TrainingSummary
from langcipher.core.utils import (
    ANALYSIS_SPLIT_PATTERN,
    char_key,
    char_key_counts,
    separator_pattern,
    word_counts,
)

logger = logging.getLogger(__name__)


def _guard(op: str, fn: Callable[[], None]) -> None:
    """Run a store write, normalizing any failure to StoreUnavailableError."""
    try:
        fn()
    except LangCipherError:
        raise
    except Exception as e:
        raise StoreUnavailableError(f"{op} failed: {e}") from e


class LanguageModel:
    """
    Train per-language word/character frequency profiles into a
    FrequencyStore and score unknown text against all of them.
    """

    def __init__(self, store) -> None:
        if store is None:
            raise ValueError("LanguageModel needs a frequency store.")
        self.store = store

    # ----------------------------
    # Training
    # ----------------------------

    def train(
        self,
        language: str,
        text: Optional[str],
        word_separators: Optional[Sequence[str]],
    ) -> TrainingSummary:
        if language is None or not language.strip():
            raise InvalidLanguageError("Language name cannot be empty.")
        if word_separators is None:
            raise InvalidFormatError("Word separators cannot be None; pass an empty list to split on whitespace.")

        lang = language.strip()
        body = (text or "").lower()

        pattern = separator_pattern(word_separators)
        logger.debug("train %s: word split pattern %r", lang, pattern)
        words = word_counts(body, pattern)

        # a single-character separator is never also a character datum
        skip = {s for s in word_separators if s is not None and len(s) == 1}
        if skip:
            logger.debug("train %s: excluding separator chars %s", lang, sorted(char_key(c) for c in skip))
        chars = char_key_counts(body, exclude=skip)

        logger.debug("train %s: %d distinct words, %d distinct chars", lang, len(words), len(chars))

        for word, n in words.items():
            _guard(
                f"increment word {word!r} for {lang}",
                lambda w=word, n=n: self.store.increment_word_frequency(lang, w, n),
            )
        for key, n in chars.items():
            _guard(
                f"increment char {key!r} for {lang}",
                lambda k=key, n=n: self.store.increment_char_frequency(lang, k, n),
            )

        _guard(f"recompute word percentages for {lang}", lambda: self.store.recompute_word_percentages(lang))
        _guard(f"recompute char percentages for {lang}", lambda: self.store.recompute_char_percentages(lang))

        logger.info("trained %s: %d words, %d chars", lang, sum(words.values()), sum(chars.values()))
        return TrainingSummary(
            language=lang,
            distinct_words=len(words),
            distinct_chars=len(chars),
            total_words=sum(words.values()),
            total_chars=sum(chars.values()),
        )

    # ----------------------------
    # Analysis
    # ----------------------------

    def _lookup(self, fn: Callable[[str, str], Lookup], lang: str, token: str) -> Lookup:
        try:
            return fn(lang, token)
        except Exception as e:
            return Lookup.transient(e)

    def _contribution(
        self,
        counts: Counter,
        fn: Callable[[str, str], Lookup],
        lang: str,
        kind: str,
    ) -> tuple[float, int, int]:
        """Sum count * stored percent; misses and unparsable values add zero."""
        total = 0.0
        missing = 0
        transient = 0
        for token, n in counts.items():
            found = self._lookup(fn, lang, token)
            if found.status is LookupStatus.MISSING:
                missing += 1
                continue
            if found.status is LookupStatus.TRANSIENT:
                transient += 1
                logger.warning("%s %r in %s: store unreachable (%s); counting as 0", kind, token, lang, found.error)
                continue
            try:
                total += n * found.as_float()
            except ValueError:
                missing += 1
                logger.warning("%s %r in %s: cannot parse frequency %r; counting as 0", kind, token, lang, found.value)
        return total, missing, transient

    def score(self, text: Optional[str]) -> list[LanguageScore]:
        """Per-language breakdown behind analyze(), best match first."""
        if text is None:
            return []

        body = text.lower()
        words = word_counts(body, ANALYSIS_SPLIT_PATTERN)
        chars = char_key_counts(body)
        logger.debug("analyze: %d distinct words, %d distinct chars", len(words), len(chars))

        languages = sorted(name for name in self.store.list_languages() if name and name.strip())
        if not languages:
            logger.debug("analyze: no stored languages")
            return []

        partial: list[tuple[str, float, float, int, int]] = []
        for lang in languages:
            w, w_miss, w_err = self._contribution(words, self.store.get_word_percentage, lang, "word")
            c, c_miss, c_err = self._contribution(chars, self.store.get_char_percentage, lang, "char")
            logger.debug("analyze %s: word score %.4f, char score %.4f", lang, w, c)
            partial.append((lang, w, c, w_miss + c_miss, w_err + c_err))

        total = sum(w + c for _, w, c, _, _ in partial)
        scores = [
            LanguageScore(
                language=lang,
                word_score=w,
                char_score=c,
                percent=((w + c) / total) * 100.0 if total > 0 else 0.0,
                missing=miss,
                transient=err,
            )
            for lang, w, c, miss, err in partial
        ]
        return sorted(scores)

    def analyze(self, text: Optional[str]) -> dict[str, float]:
        """Language -> percentage; sums to 100, or all zeros if nothing matched."""
        return {s.language: s.percent for s in self.score(text)}
