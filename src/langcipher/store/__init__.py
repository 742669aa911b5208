from __future__ import annotations

from .base import FrequencyStore
from .memory import MemoryFrequencyStore
from .jsonfile import JsonFrequencyStore


def register_all() -> None:
    from langcipher.core.registry import register_store

    register_store("memory", lambda settings: MemoryFrequencyStore(), description="in-process, not persisted")
    register_store(
        "json",
        lambda settings: JsonFrequencyStore(settings.resolved_store_path()),
        description="local JSON file",
    )

    def _supabase(settings):
        from .supabase_store import SupabaseFrequencyStore

        return SupabaseFrequencyStore.from_settings(settings)

    register_store("supabase", _supabase, description="hosted Supabase tables and RPCs")


__all__ = ["FrequencyStore", "MemoryFrequencyStore", "JsonFrequencyStore", "register_all"]
