from .results import Lookup, LookupStatus, SolveResult, SymbolFrequency, LanguageScore, LanguageProfile
from .errors import LangCipherError
from .utils import preprocess, char_key
from .registry import register_store, open_store, list_stores

__all__ = [
    "Lookup",
    "LookupStatus",
    "SolveResult",
    "SymbolFrequency",
    "LanguageScore",
    "LanguageProfile",
    "LangCipherError",
    "preprocess",
    "char_key",
    "register_store",
    "open_store",
    "list_stores",
]
