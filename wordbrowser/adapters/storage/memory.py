# wordbrowser/adapters/storage/memory.py
from typing import Dict, Optional

from wordbrowser.core.ports import KeyValueStorage


class InMemoryStorage(KeyValueStorage):
    """Dict-backed storage. Used by tests and by STORAGE_BACKEND=memory."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
