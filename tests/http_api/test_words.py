# tests/http_api/test_words.py
import json

import pytest
from fastapi.testclient import TestClient

from tests.conftest import FailingStorage, StaticSource, stored_json
from wordbrowser.core.domain.exceptions import DataLoadFailure
from wordbrowser.main import create_app

API_PREFIX = "/api/v1"


@pytest.fixture
def client(container):
    """
    Fresh app per test; entering the client runs the lifespan, which loads
    the (static) dataset into the container's store.
    """
    app = create_app(container)
    with TestClient(app) as c:
        yield c


def test_health_reports_loaded_entries(client) -> None:
    response = client.get(f"{API_PREFIX}/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "entries": 4, "remote": 4, "load_error": None}


def test_search_defaults_to_all_sorted(client) -> None:
    data = client.get(f"{API_PREFIX}/words").json()
    assert [w["word"] for w in data["items"]] == ["Ama", "Biru", "Cara", "lumen"]
    assert data["total"] == 4
    assert data["has_more"] is False


def test_search_with_filters_and_paging(client) -> None:
    params = {"tags": ["core", "common"], "page_size": 2, "page_index": 0}
    data = client.get(f"{API_PREFIX}/words", params=params).json()

    assert [w["word"] for w in data["items"]] == ["Ama", "Cara"]
    assert data["total"] == 3
    assert data["has_more"] is True

    beyond = client.get(f"{API_PREFIX}/words", params={**params, "page_index": 9}).json()
    assert beyond["items"] == [] and beyond["has_more"] is False


def test_search_by_letter(client) -> None:
    data = client.get(f"{API_PREFIX}/words", params={"letter": "B", "text": "ignored"}).json()
    assert [w["word"] for w in data["items"]] == ["Biru", "Cara"]


def test_invalid_paging_is_rejected(client) -> None:
    assert client.get(f"{API_PREFIX}/words", params={"page_size": 0}).status_code == 422
    assert client.get(f"{API_PREFIX}/words", params={"page_index": -1}).status_code == 422


def test_letters(client) -> None:
    assert client.get(f"{API_PREFIX}/letters").json() == {"letters": ["A", "B", "C", "L"]}


def test_get_word_and_404_envelope(client) -> None:
    entry = client.get(f"{API_PREFIX}/words/Biru").json()
    assert entry["icon"] == {"kind": "file", "value": "biru.svg"}

    missing = client.get(f"{API_PREFIX}/words/nope")
    assert missing.status_code == 404
    assert missing.json()["status"] == "error"


def test_word_icon_is_resolved(client) -> None:
    icon = client.get(f"{API_PREFIX}/words/Biru/icon").json()
    assert icon == {"kind": "file", "content": "<svg id='biru'/>"}


def test_add_edit_delete_cycle(client, storage) -> None:
    created = client.post(f"{API_PREFIX}/words", json={"word": "Zeta", "definition": "last"})
    assert created.status_code == 201
    entry_id = created.json()["entry"]["id"]

    found = client.get(f"{API_PREFIX}/words", params={"text": "zet"}).json()
    assert [w["id"] for w in found["items"]] == [entry_id]

    edited = client.put(f"{API_PREFIX}/words/{entry_id}", json={"word": "Zeta", "definition": "omega"})
    assert edited.json()["entry"]["definition"] == "omega"
    assert client.get(f"{API_PREFIX}/words/{entry_id}").json()["definition"] == "omega"

    assert client.delete(f"{API_PREFIX}/words/{entry_id}").status_code == 200
    assert client.get(f"{API_PREFIX}/words", params={"text": "zet"}).json()["total"] == 0
    assert client.delete(f"{API_PREFIX}/words/{entry_id}").status_code == 404
    assert stored_json(storage, "wordbrowser.overrides") == []


def test_add_requires_word(client) -> None:
    assert client.post(f"{API_PREFIX}/words", json={"definition": "x"}).status_code == 422
    assert client.post(f"{API_PREFIX}/words", json={"word": "   "}).status_code == 422


def test_delete_remote_then_reset(client) -> None:
    client.delete(f"{API_PREFIX}/words/Ama")
    assert client.get(f"{API_PREFIX}/words").json()["total"] == 3

    reset = client.post(f"{API_PREFIX}/reset")
    assert reset.json()["status"] == "reset"
    assert client.get(f"{API_PREFIX}/words").json()["total"] == 4


def test_favorites_toggle_and_filter(client, storage) -> None:
    toggled = client.post(f"{API_PREFIX}/favorites/lumen").json()
    assert toggled == {"key": "lumen", "favorite": True, "warning": None}
    assert stored_json(storage, "favWords") == ["lumen"]

    data = client.get(f"{API_PREFIX}/words", params={"favorites_only": True}).json()
    assert [w["word"] for w in data["items"]] == ["lumen"]
    assert client.get(f"{API_PREFIX}/favorites").json() == {"favorites": ["lumen"]}


def test_export_is_a_json_attachment(client) -> None:
    response = client.get(f"{API_PREFIX}/export")
    assert response.status_code == 200
    assert "attachment" in response.headers["content-disposition"]
    assert [w["word"] for w in json.loads(response.text)] == ["Ama", "Biru", "lumen", "Cara"]


def test_persist_failure_is_reported_not_raised(container, sample_words) -> None:
    container.storage.override(FailingStorage())
    with TestClient(create_app(container)) as client:
        toggled = client.post(f"{API_PREFIX}/favorites/Ama")
        assert toggled.status_code == 200
        assert toggled.json()["favorite"] is True
        assert "quota exceeded" in toggled.json()["warning"]

        created = client.post(f"{API_PREFIX}/words", json={"word": "Zeta"})
        assert created.status_code == 201
        assert created.json()["warning"]


def test_dataset_failure_starts_degraded(container) -> None:
    container.dataset_loader.override(StaticSource(error=DataLoadFailure("Data not found")))
    with TestClient(create_app(container)) as client:
        health = client.get(f"{API_PREFIX}/health").json()
        assert health["status"] == "degraded"
        assert "Data not found" in health["load_error"]
        assert client.get(f"{API_PREFIX}/words").json()["total"] == 0

        assert client.post(f"{API_PREFIX}/words", json={"word": "Zeta"}).status_code == 201
        assert client.get(f"{API_PREFIX}/words").json()["total"] == 1


def test_entry_ids_never_collide_with_collection_routes(container, sample_words) -> None:
    words = sample_words + [{"word": "export"}, {"word": "letters"}, {"word": "reset"}]
    container.dataset_loader.override(StaticSource(payload=words))
    with TestClient(create_app(container)) as client:
        for word in ("export", "letters", "reset"):
            response = client.get(f"{API_PREFIX}/words/{word}")
            assert response.status_code == 200
            assert response.json()["word"] == word

        assert client.delete(f"{API_PREFIX}/words/reset").json()["status"] == "deleted"
        assert client.get(f"{API_PREFIX}/words").json()["total"] == 6
