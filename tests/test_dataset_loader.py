# tests/test_dataset_loader.py
import json
from unittest.mock import MagicMock

import pytest
import requests

from wordbrowser.adapters.dataset.loader import DatasetLoader
from wordbrowser.core.domain.exceptions import DataFormatInvalid, DataLoadFailure


def _write(path, payload) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_first_candidate_wins(tmp_path) -> None:
    _write(tmp_path / "data" / "words.json", [{"word": "Ama"}])
    _write(tmp_path / "Data" / "words.json", [{"word": "Other"}])

    assert DatasetLoader(str(tmp_path)).fetch() == [{"word": "Ama"}]


def test_falls_back_to_next_candidate(tmp_path) -> None:
    _write(tmp_path / "Data" / "words.json", [{"word": "Biru"}])

    assert DatasetLoader(str(tmp_path)).fetch() == [{"word": "Biru"}]


def test_all_candidates_missing_raises_load_failure(tmp_path) -> None:
    loader = DatasetLoader(str(tmp_path), candidates=["a.json", "b.json"])
    with pytest.raises(DataLoadFailure) as exc:
        loader.fetch()
    assert [p.rsplit("/", 1)[-1] for p in exc.value.attempts] == ["a.json", "b.json"]


def test_non_array_payload_is_format_invalid(tmp_path) -> None:
    _write(tmp_path / "data" / "words.json", {"words": []})
    with pytest.raises(DataFormatInvalid):
        DatasetLoader(str(tmp_path)).fetch()


def test_undecodable_bytes_are_format_invalid(tmp_path) -> None:
    path = tmp_path / "data" / "words.json"
    path.parent.mkdir()
    path.write_bytes(b'[{"word": "\xff"}]')
    # found but wrong: no fallback to the next candidate
    _write(tmp_path / "Data" / "words.json", [{"word": "Other"}])

    with pytest.raises(DataFormatInvalid):
        DatasetLoader(str(tmp_path)).fetch()


def test_utf8_bom_is_accepted(tmp_path) -> None:
    path = tmp_path / "data" / "words.json"
    path.parent.mkdir()
    path.write_bytes(b"\xef\xbb\xbf" + json.dumps([{"word": "Ama"}]).encode("utf-8"))

    assert DatasetLoader(str(tmp_path)).fetch() == [{"word": "Ama"}]


def test_unparsable_json_is_format_invalid(tmp_path) -> None:
    path = tmp_path / "data" / "words.json"
    path.parent.mkdir()
    path.write_text("[{oops", encoding="utf-8")
    with pytest.raises(DataFormatInvalid):
        DatasetLoader(str(tmp_path)).fetch()


def _response(status: int, body: str = "") -> MagicMock:
    resp = MagicMock()
    resp.ok = 200 <= status < 300
    resp.status_code = status
    resp.text = body
    return resp


def test_http_candidates_fall_back_on_bad_status() -> None:
    session = MagicMock(spec=requests.Session)
    session.get.side_effect = [
        _response(404),
        _response(200, json.dumps([{"word": "Ama"}])),
    ]
    loader = DatasetLoader("https://example.org/dict", session=session, timeout=5)

    assert loader.fetch() == [{"word": "Ama"}]

    urls = [call.args[0] for call in session.get.call_args_list]
    assert urls == [
        "https://example.org/dict/data/words.json",
        "https://example.org/dict/Data/words.json",
    ]
    kwargs = session.get.call_args.kwargs
    assert "_" in kwargs["params"]
    assert kwargs["timeout"] == 5


def test_http_connection_errors_exhaust_to_load_failure() -> None:
    session = MagicMock(spec=requests.Session)
    session.get.side_effect = requests.ConnectionError("offline")
    loader = DatasetLoader("http://localhost:9", session=session)

    with pytest.raises(DataLoadFailure):
        loader.fetch()
    assert session.get.call_count == 2
