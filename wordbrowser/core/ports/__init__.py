# wordbrowser/core/ports/__init__.py
"""
Core Ports (Interfaces).

Abstract base classes the infrastructure adapters implement. The store and
use cases only ever talk to these, so a storage backend or dataset source can
be swapped (in-memory for tests, file-backed for a headless target, HTTP for
a hosted word list) without touching the query engine.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

# =========================================================
# 1. PERSISTENCE PORTS
# =========================================================

class KeyValueStorage(ABC):
    """
    Durable string key/value storage (the local-storage contract).

    Writes that the backend rejects raise PersistenceFailure.
    """
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored string, or None when the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a string under key."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete key; absent keys are ignored."""
        pass

# =========================================================
# 2. DATA SOURCE PORTS
# =========================================================

class DatasetSource(ABC):
    """
    Port for fetching the raw word list.
    """
    @abstractmethod
    def fetch(self) -> Any:
        """
        Return the decoded JSON payload.
        Raises DataLoadFailure or DataFormatInvalid.
        """
        pass

# =========================================================
# EXPORTS
# =========================================================
__all__ = [
    "KeyValueStorage",
    "DatasetSource",
]
