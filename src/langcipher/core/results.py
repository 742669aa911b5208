from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True, order=True)
class SymbolFrequency:
    # sort_index comes first so dataclass ordering uses it automatically
    sort_index: int = field(init=False, repr=False)

    symbol: str
    count: int = 0

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"Frequency for {self.symbol!r} cannot be negative.")
        # ascending sort puts the most frequent symbol first
        object.__setattr__(self, "sort_index", -self.count)


@dataclass(frozen=True)
class SolveResult:
    cipher_name: str
    plaintext: str
    key: Optional[int] = None

    # For transparency / debugging (why this key was chosen)
    notes: str = ""

    # most frequent symbol, reference symbol, histogram
    meta: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "cipher_name": self.cipher_name,
            "plaintext": self.plaintext,
            "key": self.key,
            "notes": self.notes,
            "meta": dict(self.meta),
        }


@dataclass
class FrequencyEntry:
    absolute: int = 0
    percent: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"absolute": self.absolute, "percent": self.percent}


@dataclass
class LanguageProfile:
    """Word and character frequency tables for one language."""

    language: str
    words: dict[str, FrequencyEntry] = field(default_factory=dict)
    chars: dict[str, FrequencyEntry] = field(default_factory=dict)

    def word_counts(self) -> dict[str, int]:
        return {w: e.absolute for w, e in self.words.items()}

    def char_counts(self) -> dict[str, int]:
        return {c: e.absolute for c, e in self.chars.items()}

    def to_dict(self) -> dict[str, Any]:
        return {
            "words": {w: e.to_dict() for w, e in self.words.items()},
            "chars": {c: e.to_dict() for c, e in self.chars.items()},
        }

    @classmethod
    def from_dict(cls, language: str, data: dict[str, Any]) -> "LanguageProfile":
        def _table(raw: dict[str, Any]) -> dict[str, FrequencyEntry]:
            return {
                k: FrequencyEntry(absolute=int(v.get("absolute", 0)), percent=float(v.get("percent", 0.0)))
                for k, v in (raw or {}).items()
            }

        return cls(language=language, words=_table(data.get("words", {})), chars=_table(data.get("chars", {})))


@dataclass(frozen=True, order=True)
class LanguageScore:
    sort_index: tuple[float, str] = field(init=False, repr=False)

    language: str
    word_score: float = 0.0
    char_score: float = 0.0
    percent: float = 0.0

    # lookups that contributed nothing
    missing: int = 0
    transient: int = 0

    @property
    def raw_score(self) -> float:
        return self.word_score + self.char_score

    def __post_init__(self) -> None:
        # best match first, then alphabetical for a stable listing
        object.__setattr__(self, "sort_index", (-self.percent, self.language))


@dataclass(frozen=True)
class TrainingSummary:
    language: str
    distinct_words: int
    distinct_chars: int
    total_words: int
    total_chars: int


class LookupStatus(enum.Enum):
    FOUND = "found"
    MISSING = "missing"
    TRANSIENT = "transient"


@dataclass(frozen=True)
class Lookup:
    """Tagged outcome of a store read: a value, a genuine miss, or an unreachable store."""

    status: LookupStatus
    value: Any = None
    error: Optional[BaseException] = None

    @classmethod
    def found(cls, value: Any) -> "Lookup":
        return cls(LookupStatus.FOUND, value=value)

    @classmethod
    def missing(cls) -> "Lookup":
        return cls(LookupStatus.MISSING)

    @classmethod
    def transient(cls, error: BaseException) -> "Lookup":
        return cls(LookupStatus.TRANSIENT, error=error)

    @property
    def is_found(self) -> bool:
        return self.status is LookupStatus.FOUND

    def as_float(self) -> float:
        """Parse the stored value as a decimal; raises ValueError if it is not one."""
        if not self.is_found:
            raise ValueError(f"No value to parse ({self.status.value}).")
        if isinstance(self.value, (int, float)):
            return float(self.value)
        raw = f"{self.value}".strip()
        if not raw:
            raise ValueError("Stored value is empty.")
        return float(raw)
