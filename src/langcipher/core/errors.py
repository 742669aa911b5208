from __future__ import annotations

from typing import Optional


class LangCipherError(Exception):
    """Base class for every error raised by langcipher."""


class InvalidAlphabetError(LangCipherError, ValueError):
    pass


class InvalidFormatError(LangCipherError, ValueError):
    pass


class InvalidLanguageError(LangCipherError, ValueError):
    pass


class UnknownSymbolError(LangCipherError, ValueError):
    def __init__(self, symbol: str, position: Optional[int] = None, message: Optional[str] = None) -> None:
        self.symbol = symbol
        self.position = position
        if message is None:
            where = f" at position {position}" if position is not None else ""
            message = f"Unknown character {symbol!r}{where}; add it to the alphabet or remove it."
        super().__init__(message)


class UnknownAlphabetSymbolError(UnknownSymbolError):
    pass


class UniformFrequencyError(LangCipherError, ValueError):
    pass


class StoreUnavailableError(LangCipherError, IOError):
    pass


class NotFoundError(LangCipherError, LookupError):
    pass
