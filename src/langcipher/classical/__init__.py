from __future__ import annotations

from .common import PASS_THROUGH, PRESETS, Alphabet, build_alphabet, resolve_alphabet, shift
from .monoalphabetic.caesar import CaesarCipher, crack, crack_with_store, decrypt, encrypt, symbol_frequencies

__all__ = [
    "PASS_THROUGH",
    "PRESETS",
    "Alphabet",
    "build_alphabet",
    "resolve_alphabet",
    "shift",
    "CaesarCipher",
    "encrypt",
    "decrypt",
    "crack",
    "crack_with_store",
    "symbol_frequencies",
]
