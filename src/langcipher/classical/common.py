from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import Sequence, Union

from langcipher.core.errors import InvalidAlphabetError, UnknownSymbolError

# Copied through cipher operations unchanged; never part of an alphabet.
PASS_THROUGH = frozenset(" ,.-;:'[]()|*&^%$#@!~`=+")

PRESETS: dict[str, str] = {
    "latin": string.ascii_uppercase,
    "latin-digits": string.ascii_uppercase + string.digits,
}


def canonical(ch: str) -> str:
    return ch.upper()


def is_pass_through(ch: str) -> bool:
    return ch in PASS_THROUGH


@dataclass(frozen=True)
class Alphabet:
    symbols: tuple[str, ...]
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", {s: i for i, s in enumerate(self.symbols)})

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, ch: object) -> bool:
        return isinstance(ch, str) and canonical(ch) in self._index

    def __str__(self) -> str:
        return " ".join(self.symbols)

    def index(self, ch: str) -> int:
        try:
            return self._index[canonical(ch)]
        except KeyError:
            raise UnknownSymbolError(ch) from None

    def shift(self, ch: str, key: int) -> str:
        """Shift one member symbol by key positions (negative keys wrap); preserves case."""
        target = self.symbols[(self.index(ch) + key) % len(self.symbols)]
        return target if ch == ch.upper() else target.lower()


def _tokens(spec: Union[str, Sequence[str]]) -> list[str]:
    if isinstance(spec, str):
        if any(ch.isspace() for ch in spec):
            return spec.split()
        return list(spec)
    return list(spec)


def build_alphabet(spec: Union[str, Sequence[str], None]) -> Alphabet:
    """
    Accept either:
      1) a string of whitespace-separated symbols, e.g. "A B C"
      2) a string of adjacent symbols, e.g. "ABC"
      3) any sequence of one-character strings
    Symbols are case-folded to upper case for indexing.
    """
    if spec is None:
        raise InvalidAlphabetError("Alphabet cannot be empty.")

    tokens = _tokens(spec)
    if not tokens:
        raise InvalidAlphabetError("Alphabet cannot be empty.")

    seen: set[str] = set()
    symbols: list[str] = []
    for tok in tokens:
        if not isinstance(tok, str) or len(tok) != 1:
            raise InvalidAlphabetError(f"Bad alphabet symbol {tok!r}. Use single characters like 'A'.")
        sym = canonical(tok)
        if len(sym) != 1:
            raise InvalidAlphabetError(f"Symbol {tok!r} has no single-character upper case.")
        if tok in PASS_THROUGH or sym in PASS_THROUGH:
            raise InvalidAlphabetError(f"Symbol {tok!r} is a pass-through character and cannot be shifted.")
        if sym in seen:
            raise InvalidAlphabetError(f"Alphabet repeats symbol {sym!r}.")
        seen.add(sym)
        symbols.append(sym)

    return Alphabet(tuple(symbols))


def resolve_alphabet(name_or_spec: str) -> Alphabet:
    """Build from a preset name ("latin") or a literal spec."""
    preset = PRESETS.get(name_or_spec.strip().lower()) if name_or_spec else None
    return build_alphabet(preset if preset is not None else name_or_spec)


def shift(ch: str, alphabet: Alphabet, key: int) -> str:
    return alphabet.shift(ch, key)
