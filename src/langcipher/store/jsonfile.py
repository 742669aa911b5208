from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Union

from langcipher.core.errors import StoreUnavailableError
from langcipher.core.results import LanguageProfile

from .memory import MemoryFrequencyStore

logger = logging.getLogger(__name__)

_FORMAT_VERSION = 1


class JsonFrequencyStore(MemoryFrequencyStore):
    """
    Memory store backed by a JSON file.

    The file is rewritten after every percentage recompute (the last step of
    training) and on flush(). Increments alone stay in memory until then.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> dict[str, LanguageProfile]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StoreUnavailableError(f"Cannot read frequency file {self.path}: {e}") from e

        langs = data.get("languages", {}) if isinstance(data, dict) else {}
        profiles = {name: LanguageProfile.from_dict(name, raw) for name, raw in langs.items()}
        logger.debug("loaded %d language profile(s) from %s", len(profiles), self.path)
        return profiles

    def _snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {
                "version": _FORMAT_VERSION,
                "languages": {name: p.to_dict() for name, p in sorted(self._profiles.items())},
            }

    def flush(self) -> None:
        # atomic write: write to temp then replace; one writer at a time
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with self._lock:
            data = self._snapshot()
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with tmp.open("w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp, self.path)
            except (OSError, TypeError, ValueError) as e:
                raise StoreUnavailableError(f"Cannot write frequency file {self.path}: {e}") from e
            finally:
                if tmp.exists():
                    tmp.unlink()

    def recompute_word_percentages(self, language: str) -> None:
        super().recompute_word_percentages(language)
        self.flush()

    def recompute_char_percentages(self, language: str) -> None:
        super().recompute_char_percentages(language)
        self.flush()
