from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .config import Settings
from .errors import LangCipherError


@dataclass
class _StoreEntry:
    factory: Callable[[Settings], object]
    description: str = ""


_STORES: dict[str, _StoreEntry] = {}


def register_store(name: str, factory: Callable[[Settings], object], *, description: str = "") -> None:
    key = name.lower().strip()
    if not key:
        raise ValueError("Store backend must have a non-empty name.")
    _STORES[key] = _StoreEntry(factory=factory, description=description)


def list_stores() -> list[str]:
    return sorted(_STORES.keys())


def describe_store(name: str) -> Optional[str]:
    entry = _STORES.get(name.lower().strip())
    return entry.description if entry else None


def open_store(name: str, settings: Settings):
    """Build the named backend from settings."""
    key = name.lower().strip()
    if key not in _STORES:
        raise LangCipherError(f"Unknown store '{name}'. Available: {', '.join(list_stores())}")
    return _STORES[key].factory(settings)
