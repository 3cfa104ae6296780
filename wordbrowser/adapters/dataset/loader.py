# wordbrowser/adapters/dataset/loader.py
"""
Fetches the raw word list.

The list lives at a well-known relative path. Deployments have used both
`data/words.json` and `Data/words.json`, so a list of candidates is tried in
order until one answers. Candidates are resolved against `base`, which is
either a local directory or an http(s) base URL.

Behaviour
---------
- Missing file / non-2xx status / connection error -> try next candidate.
- All candidates exhausted -> DataLoadFailure.
- Body is not UTF-8 or JSON, or is not a JSON array -> DataFormatInvalid
  (no fallback: the file was found, it is just wrong). A UTF-8 BOM is
  accepted.
- HTTP requests carry a `_=<epoch-ms>` parameter so caches never serve a
  stale list.
"""

import json
import time
from pathlib import Path
from typing import Any, List, Optional, Sequence
from urllib.parse import urljoin

import requests
import structlog

from wordbrowser.core.domain.exceptions import DataFormatInvalid, DataLoadFailure
from wordbrowser.core.ports import DatasetSource

logger = structlog.get_logger()

DEFAULT_CANDIDATES = ("data/words.json", "Data/words.json")


def _is_url(base: str) -> bool:
    return base.startswith("http://") or base.startswith("https://")


class DatasetLoader(DatasetSource):
    def __init__(
        self,
        base: str,
        candidates: Sequence[str] = DEFAULT_CANDIDATES,
        timeout: Optional[float] = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.base = base
        self.candidates = list(candidates)
        self.timeout = timeout
        self._session = session

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def fetch(self) -> List[Any]:
        attempts: List[str] = []
        for candidate in self.candidates:
            location = self._resolve(candidate)
            body = self._read_http(location) if _is_url(location) else self._read_file(location)
            attempts.append(location)
            if body is None:
                continue

            payload = self._decode(location, body)
            logger.info("dataset_fetched", source=location, count=len(payload))
            return payload

        logger.error("dataset_unavailable", attempts=attempts)
        raise DataLoadFailure(
            "Could not load dictionary data: no dataset found", attempts=attempts
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve(self, candidate: str) -> str:
        if _is_url(candidate):
            return candidate
        if _is_url(self.base):
            return urljoin(self.base.rstrip("/") + "/", candidate)
        return str(Path(self.base) / candidate)

    def _read_file(self, location: str) -> Optional[str]:
        path = Path(location)
        if not path.is_file():
            logger.debug("dataset_candidate_missing", source=location)
            return None
        try:
            return path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise DataFormatInvalid(f"{location} is not valid UTF-8: {e}") from e
        except OSError as e:
            logger.warning("dataset_candidate_unreadable", source=location, error=str(e))
            return None

    def _read_http(self, location: str) -> Optional[str]:
        http = self._session or requests
        try:
            resp = http.get(
                location,
                params={"_": int(time.time() * 1000)},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("dataset_candidate_unreachable", source=location, error=str(e))
            return None
        if not resp.ok:
            logger.warning("dataset_candidate_status", source=location, status=resp.status_code)
            return None
        return resp.text

    @staticmethod
    def _decode(location: str, body: str) -> List[Any]:
        try:
            payload = json.loads(body)
        except ValueError as e:
            raise DataFormatInvalid(f"{location} is not valid JSON: {e}") from e
        if not isinstance(payload, list):
            raise DataFormatInvalid(
                f"{location} must contain a JSON array, got {type(payload).__name__}"
            )
        return payload
