# wordbrowser/adapters/storage/filesystem.py
import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

import structlog

from wordbrowser.core.domain.exceptions import PersistenceFailure
from wordbrowser.core.ports import KeyValueStorage

logger = structlog.get_logger()

# Browsers typically cap local storage around 5 MiB per origin.
DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024


class JsonFileStorage(KeyValueStorage):
    """
    Local-storage lookalike persisted as one JSON object on disk:

        { "favWords": "[\"Ama\"]", "wordbrowser.overrides": "[...]" }

    - Values are opaque strings (callers do their own JSON encoding).
    - Every write rewrites the file atomically (temp file + os.replace).
    - A write that would push the file past `quota_bytes` is rejected with
      PersistenceFailure and leaves the file untouched.
    """

    def __init__(self, path: str, quota_bytes: Optional[int] = DEFAULT_QUOTA_BYTES):
        self.path = Path(path).resolve()
        self.quota_bytes = quota_bytes
        self._data: Dict[str, str] = self._read()

    # ------------------------------------------------------------------
    # Internal I/O
    # ------------------------------------------------------------------

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read()
            data = json.loads(content) if content else {}
        except (OSError, ValueError) as e:
            logger.warning("storage_read_failed", path=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning("storage_file_not_an_object", path=str(self.path))
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, key: str, data: Dict[str, str]) -> None:
        payload = json.dumps(data, ensure_ascii=False, indent=2)
        size = len(payload.encode("utf-8"))
        if self.quota_bytes is not None and size > self.quota_bytes:
            raise PersistenceFailure(key, f"quota exceeded ({size} > {self.quota_bytes} bytes)")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=str(self.path.parent), prefix=".storage-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp, self.path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as e:
            logger.error("storage_write_failed", path=str(self.path), key=key, error=str(e))
            raise PersistenceFailure(key, str(e)) from e

    # ------------------------------------------------------------------
    # KeyValueStorage
    # ------------------------------------------------------------------

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        candidate = dict(self._data)
        candidate[key] = value
        self._write(key, candidate)
        self._data = candidate

    def remove(self, key: str) -> None:
        if key not in self._data:
            return
        candidate = dict(self._data)
        del candidate[key]
        self._write(key, candidate)
        self._data = candidate
