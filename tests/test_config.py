from pathlib import Path

import pytest

from langcipher.core.config import Settings, load_settings, user_data_dir
from langcipher.core.errors import LangCipherError
from langcipher.core.registry import describe_store, list_stores, open_store
from langcipher.store import JsonFrequencyStore, MemoryFrequencyStore, register_all


def test_defaults():
    s = load_settings(dotenv=False)
    assert s == Settings()
    assert s.store == "json"
    assert s.alphabet == "latin"
    assert s.resolved_store_path() == user_data_dir() / "frequencies.json"


def test_environment_values(monkeypatch, tmp_path):
    monkeypatch.setenv("LANGCIPHER_STORE", " Memory ")
    monkeypatch.setenv("LANGCIPHER_STORE_PATH", str(tmp_path / "f.json"))
    monkeypatch.setenv("LANGCIPHER_ALPHABET", "A B C")
    monkeypatch.setenv("LANGCIPHER_LOG_LEVEL", "debug")
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")

    s = load_settings(dotenv=False)
    assert s.store == "memory"
    assert s.resolved_store_path() == tmp_path / "f.json"
    assert s.alphabet == "A B C"
    assert s.log_level == "DEBUG"
    assert s.supabase_key == "anon"


def test_service_key_wins_over_anon_key(monkeypatch):
    monkeypatch.setenv("SUPABASE_KEY", "service")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
    assert load_settings(dotenv=False).supabase_key == "service"


def test_overrides_skip_none():
    s = Settings().with_overrides(store="memory", alphabet=None, store_path=Path("x.json"))
    assert s.store == "memory"
    assert s.alphabet == "latin"
    assert s.store_path == Path("x.json")
    assert Settings().with_overrides(store=None) == Settings()


def test_registry_opens_backends(tmp_path):
    register_all()
    assert list_stores() == ["json", "memory", "supabase"]
    assert describe_store("JSON") == "local JSON file"

    assert isinstance(open_store("memory", Settings()), MemoryFrequencyStore)
    js = open_store("json", Settings(store_path=tmp_path / "f.json"))
    assert isinstance(js, JsonFrequencyStore)
    assert js.path == tmp_path / "f.json"


def test_unknown_store():
    register_all()
    with pytest.raises(LangCipherError):
        open_store("redis", Settings())
