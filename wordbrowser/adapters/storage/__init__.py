"""Storage adapters implementing the KeyValueStorage port."""

from .filesystem import JsonFileStorage
from .memory import InMemoryStorage

__all__ = ["InMemoryStorage", "JsonFileStorage"]
