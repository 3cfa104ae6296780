# tests/conftest.py
import json
from typing import Any, List, Optional

import pytest

from wordbrowser.adapters.icons import IconResolver
from wordbrowser.adapters.storage import InMemoryStorage
from wordbrowser.core.domain.exceptions import PersistenceFailure
from wordbrowser.core.ports import DatasetSource
from wordbrowser.services.word_store import WordStore
from wordbrowser.shared.container import Container

SAMPLE_WORDS: List[dict] = [
    {"word": "Ama", "pos": "noun", "definition": "love", "usage": "Ama ti lumen.", "tags": ["core"]},
    {"word": "Biru", "pos": "adjective", "definition": "blue", "tags": ["rare"], "icon": "biru.svg"},
    {"word": "lumen", "pos": "noun", "definition": "light", "tags": ["core", "common"], "icon": "char:☀"},
    {"word": "Cara", "pos": "verb", "definition": "to call out", "usage": "cara biru", "rarity": "common"},
]


class StaticSource(DatasetSource):
    """Dataset source returning a fixed payload, or raising a fixed error."""

    def __init__(self, payload: Any = None, error: Optional[Exception] = None):
        self.payload = payload
        self.error = error
        self.calls = 0

    def fetch(self) -> Any:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.payload


class FailingStorage(InMemoryStorage):
    """Storage whose writes are rejected, like a full browser quota."""

    def set(self, key: str, value: str) -> None:
        raise PersistenceFailure(key, "quota exceeded")

    def remove(self, key: str) -> None:
        raise PersistenceFailure(key, "storage disabled")


@pytest.fixture
def sample_words() -> List[dict]:
    return [dict(w) for w in SAMPLE_WORDS]


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def store(storage, sample_words) -> WordStore:
    """A store loaded with the sample words, backed by in-memory storage."""
    s = WordStore(storage, favorites_key="favWords", overrides_key="overrides")
    s.load(sample_words)
    return s


@pytest.fixture
def icon_dir(tmp_path):
    d = tmp_path / "icons"
    d.mkdir()
    (d / "biru.svg").write_text("<svg id='biru'/>", encoding="utf-8")
    return d


@pytest.fixture(scope="function")
def container(storage, sample_words, icon_dir):
    """
    Dependency Injection Container with infrastructure replaced:
    in-memory storage, a static dataset and a temp icon directory.
    """
    container = Container()

    container.storage.override(storage)
    container.dataset_loader.override(StaticSource(payload=sample_words))
    container.icon_resolver.override(IconResolver(str(icon_dir)))

    yield container

    container.unwire()
    container.reset_override()


def stored_json(storage: InMemoryStorage, key: str) -> Any:
    raw = storage.get(key)
    return json.loads(raw) if raw is not None else None
