"""Runtime settings.

Values come from the process environment, optionally seeded from a ``.env``
file in the working directory. CLI options override whatever is loaded here.
"""

from __future__ import annotations

import logging
import os
import platform
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

_APP_NAME = "langcipher"
_STORE_FILE = "frequencies.json"

DEFAULT_STORE = "json"
DEFAULT_ALPHABET = "latin"
DEFAULT_LOG_LEVEL = "WARNING"


def user_data_dir() -> Path:
    """Return a platform-appropriate per-user data directory for the app."""
    system = platform.system()
    home = Path.home()
    if system == "Windows":
        appdata = os.getenv("APPDATA")
        if appdata:
            return Path(appdata) / _APP_NAME
        return home / f".{_APP_NAME}"
    if system == "Darwin":
        return home / "Library" / "Application Support" / _APP_NAME
    xdg = os.getenv("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / _APP_NAME
    return home / ".local" / "share" / _APP_NAME


@dataclass(frozen=True)
class Settings:
    store: str = DEFAULT_STORE
    store_path: Optional[Path] = None
    alphabet: str = DEFAULT_ALPHABET
    log_level: str = DEFAULT_LOG_LEVEL

    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None

    def resolved_store_path(self) -> Path:
        if self.store_path is not None:
            return self.store_path
        return user_data_dir() / _STORE_FILE

    def with_overrides(self, **changes: Any) -> "Settings":
        """Copy with every non-None override applied."""
        given = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **given) if given else self


def _env(name: str) -> Optional[str]:
    val = os.getenv(name)
    if val is None:
        return None
    val = val.strip()
    return val or None


def load_settings(*, dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv()

    path = _env("LANGCIPHER_STORE_PATH")
    return Settings(
        store=(_env("LANGCIPHER_STORE") or DEFAULT_STORE).lower(),
        store_path=Path(path).expanduser() if path else None,
        alphabet=_env("LANGCIPHER_ALPHABET") or DEFAULT_ALPHABET,
        log_level=(_env("LANGCIPHER_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        supabase_url=_env("SUPABASE_URL"),
        supabase_key=_env("SUPABASE_KEY") or _env("SUPABASE_ANON_KEY"),
    )


def configure_logging(level: str) -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
