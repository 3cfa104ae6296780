"""In-memory word store and the query pipeline over it."""

from .query_engine import alphabet_index, query, select_letter
from .word_store import WordStore

__all__ = ["WordStore", "query", "alphabet_index", "select_letter"]
