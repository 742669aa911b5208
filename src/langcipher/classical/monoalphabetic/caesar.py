from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Optional

from langcipher.classical.common import Alphabet, canonical, is_pass_through
from langcipher.core.errors import (
    InvalidFormatError,
    NotFoundError,
    StoreUnavailableError,
    UniformFrequencyError,
    UnknownAlphabetSymbolError,
    UnknownSymbolError,
)
from langcipher.core.results import LookupStatus, SolveResult, SymbolFrequency
from langcipher.core.utils import is_symbolic_key, key_to_char

logger = logging.getLogger(__name__)

_WHITESPACE_RUN_RE = re.compile(r"(\s+)")


def _require_message(message: Optional[str]) -> str:
    if message is None or message == "":
        raise InvalidFormatError("Message cannot be empty.")
    return message


def encrypt(message: str, alphabet: Alphabet, key: int) -> str:
    """Shift every alphabet symbol by key; pass-through symbols are copied. All or nothing."""
    _require_message(message)

    out = []
    for pos, ch in enumerate(message):
        if ch in alphabet:
            out.append(alphabet.shift(ch, key))
        elif is_pass_through(ch):
            out.append(ch)
        else:
            raise UnknownSymbolError(ch, pos)
    return "".join(out)


def decrypt(message: str, alphabet: Alphabet, key: int) -> str:
    return encrypt(message, alphabet, -key)


def symbol_frequencies(message: str) -> list[SymbolFrequency]:
    """Case-folded symbol counts with whitespace removed, most frequent first."""
    counts = Counter(canonical(ch) for ch in message if not ch.isspace())
    # equal counts fall back to symbol order
    return sorted(SymbolFrequency(sym, n) for sym, n in counts.items())


def _most_frequent(freqs: list[SymbolFrequency], alphabet: Alphabet) -> str:
    peak = max(f.count for f in freqs)
    # ties go to the lowest alphabet index
    return min((f.symbol for f in freqs if f.count == peak), key=alphabet.index)


def _crack(message: str, alphabet: Alphabet, reference: str) -> tuple[int, str, list[SymbolFrequency]]:
    """Key, most frequent ciphertext symbol, and the alphabet-symbol histogram."""
    _require_message(message)
    if not reference or reference not in alphabet:
        raise UnknownAlphabetSymbolError(
            reference or "",
            message=f"Reference symbol {reference!r} is not in the alphabet.",
        )

    freqs = symbol_frequencies(message)
    for f in freqs:
        if f.symbol not in alphabet and not is_pass_through(f.symbol):
            raise UnknownAlphabetSymbolError(
                f.symbol,
                message=f"Unknown symbol {f.symbol!r}; update the alphabet.",
            )

    letters = [f for f in freqs if f.symbol in alphabet]
    if len({f.count for f in letters}) <= 1:
        raise UniformFrequencyError("All symbols have the same frequency, so frequency analysis cannot pick a key.")

    most = _most_frequent(letters, alphabet)
    n = len(alphabet)
    key = (alphabet.index(most) - alphabet.index(reference) + n) % n
    logger.debug("crack: most frequent %r, reference %r, key %d", most, reference, key)
    return key, most, letters


def crack(message: str, alphabet: Alphabet, reference: str) -> int:
    """
    Recover a Caesar key by lining up the ciphertext's most frequent symbol
    with the reference language's most frequent symbol.

    The returned key is how far the plaintext was shifted, so
    decrypt(message, alphabet, key) undoes it. Whitespace of any kind is
    ignored when counting.
    """
    return _crack(message, alphabet, reference)[0]


def _decrypt_lines(message: str, alphabet: Alphabet, key: int) -> str:
    """decrypt() that copies whitespace runs unchanged, for multi-line ciphertext."""
    parts = _WHITESPACE_RUN_RE.split(message)
    return "".join(p if not p or p.isspace() else decrypt(p, alphabet, key) for p in parts)


def reference_symbol(store, language: str) -> str:
    """Most frequent stored character for a language, as a plain symbol."""
    found = store.get_most_frequent_char(language)
    if found.status is LookupStatus.TRANSIENT:
        raise StoreUnavailableError(f"Could not reach store for language '{language}': {found.error}")
    if found.status is LookupStatus.MISSING or not found.value:
        raise NotFoundError(f"No character frequencies stored for language '{language}'.")

    raw = f"{found.value}"
    return key_to_char(raw) if is_symbolic_key(raw) else raw


class CaesarCipher:
    name = "caesar"

    def __init__(self, alphabet: Alphabet) -> None:
        self.alphabet = alphabet

    def encrypt(self, message: str, key: int) -> str:
        return encrypt(message, self.alphabet, key)

    def decrypt(self, message: str, key: int) -> str:
        return decrypt(message, self.alphabet, key)

    def crack(self, message: str, reference: str) -> SolveResult:
        key, most, letters = _crack(message, self.alphabet, reference)
        return SolveResult(
            cipher_name=self.name,
            plaintext=_decrypt_lines(message, self.alphabet, key),
            key=key,
            notes=f"Caesar shift {key}",
            meta={
                "most_frequent": most,
                "reference": canonical(reference),
                "frequencies": {f.symbol: f.count for f in letters},
            },
        )

    def crack_with_store(self, message: str, store, language: str) -> SolveResult:
        ref = reference_symbol(store, language)
        logger.info("crack: reference symbol for %s is %r", language, ref)
        return self.crack(message, ref)


def crack_with_store(message: str, alphabet: Alphabet, store, language: str) -> SolveResult:
    return CaesarCipher(alphabet).crack_with_store(message, store, language)
