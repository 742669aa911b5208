import sys
from pathlib import Path

import pytest

# Make the src/ layout importable when the package is not installed.
src_dir = Path(__file__).resolve().parents[1] / "src"
if src_dir.exists() and str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from langcipher.classical.common import build_alphabet, resolve_alphabet  # noqa: E402
from langcipher.lang.model import LanguageModel  # noqa: E402
from langcipher.store.memory import MemoryFrequencyStore  # noqa: E402


@pytest.fixture
def abc():
    return build_alphabet("A B C")


@pytest.fixture
def latin():
    return resolve_alphabet("latin")


@pytest.fixture
def store():
    return MemoryFrequencyStore()


@pytest.fixture
def model(store):
    return LanguageModel(store)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "LANGCIPHER_STORE",
        "LANGCIPHER_STORE_PATH",
        "LANGCIPHER_ALPHABET",
        "LANGCIPHER_LOG_LEVEL",
        "SUPABASE_URL",
        "SUPABASE_KEY",
        "SUPABASE_ANON_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
