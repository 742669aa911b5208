from __future__ import annotations

import re
from collections import Counter
from typing import Iterable, Optional, Sequence

# Word splitting used when scoring unknown text; looser than any training split.
ANALYSIS_SPLIT_PATTERN = r"[\s.,;:!?()\-]+"

DEFAULT_TRAINING_SEPARATORS: tuple[str, ...] = (
    " ", ",", ".", ";", ":", "!", "?", "(", ")", "\n", "\t", "-",
)

_WHITESPACE_KEYS = {
    " ": "_SPACE_",
    "\t": "_TAB_",
    "\n": "_NEWLINE_",
    "\r": "_CARRIAGE_RETURN_",
}
_KEY_TO_CHAR = {v: k for k, v in _WHITESPACE_KEYS.items()}
_UNICODE_KEY_RE = re.compile(r"^_U\+([0-9A-F]{4,6})_$")

_EMOJI_RE = re.compile(
    "["
    "\u2600-\u26FF"  # misc symbols
    "\u2700-\u27BF"  # dingbats
    "\U0001F300-\U0001F5FF"  # pictographs
    "\U0001F600-\U0001F64F"  # emoticons
    "\U0001F680-\U0001F6FF"  # transport and map
    "\U0001F1E0-\U0001F1FF"  # flags
    "]+"
)

# every group is optional, so empty matches are dropped in _strip_roman
_ROMAN_NUMERAL_RE = re.compile(
    r"\bm{0,3}(?:cm|cd|d?c{0,3})(?:xc|xl|l?x{0,3})(?:ix|iv|v?i{0,3})\b"
)

# apostrophes and hyphens are left alone
_HARD_PUNCT_RE = re.compile("[.,;:!?()\"\u201c\u201d\u2018\u2019\u00ab\u00bb\u2013\u2014{}\\[\\]<>]+")

_WS_RE = re.compile(r"\s+")


def _strip_roman(m: re.Match) -> str:
    return " " if m.group(0) else ""


def char_key(ch: str) -> str:
    """Storage key for one character; whitespace gets a symbolic name so keys are never blank."""
    named = _WHITESPACE_KEYS.get(ch)
    if named is not None:
        return named
    if ch.isspace():
        return f"_U+{ord(ch):04X}_"
    return ch


def key_to_char(key: str) -> str:
    """Inverse of char_key."""
    if key in _KEY_TO_CHAR:
        return _KEY_TO_CHAR[key]
    m = _UNICODE_KEY_RE.match(key)
    if m:
        return chr(int(m.group(1), 16))
    return key


def is_symbolic_key(key: str) -> bool:
    return key in _KEY_TO_CHAR or bool(_UNICODE_KEY_RE.match(key))


def separator_pattern(separators: Sequence[str]) -> str:
    """Alternation of escaped separators; falls back to whitespace runs."""
    parts = [re.escape(s) for s in separators if s]
    if not parts:
        return r"\s+"
    return "|".join(parts)


def split_words(text: str, pattern: str) -> list[str]:
    return [w for w in re.split(pattern, text) if w]


def word_counts(text: str, pattern: str) -> Counter:
    return Counter(split_words(text, pattern))


def char_key_counts(text: str, exclude: Iterable[str] = ()) -> Counter:
    skip = set(exclude)
    return Counter(char_key(ch) for ch in text if ch not in skip)


def collapse_whitespace(s: str) -> str:
    return _WS_RE.sub(" ", s).strip()


def preprocess(raw: Optional[str], noise_words: Optional[Iterable[str]] = None) -> str:
    """
    Clean raw text before training or analysis:
      lower-case, strip emoji and Roman numerals, turn hard punctuation into
      spaces, collapse whitespace, then drop user-declared noise words.
    """
    if raw is None:
        return ""

    text = raw.lower()
    text = _EMOJI_RE.sub(" ", text)
    text = _ROMAN_NUMERAL_RE.sub(_strip_roman, text)
    text = _HARD_PUNCT_RE.sub(" ", text)
    text = collapse_whitespace(text)

    if noise_words:
        noise = {w.lower() for w in noise_words if w}
        if noise:
            text = " ".join(w for w in text.split(" ") if w and w not in noise)
            text = collapse_whitespace(text)

    return text
