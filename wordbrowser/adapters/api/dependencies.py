# wordbrowser/adapters/api/dependencies.py
from typing import List, Optional

from fastapi import Query

from wordbrowser.core.domain.exceptions import PersistenceFailure
from wordbrowser.core.domain.models import QuerySpec
from wordbrowser.services.word_store import WordStore
from wordbrowser.shared.config import settings


def query_spec(
    text: str = Query("", description="Substring matched against word, definition and usage"),
    tags: List[str] = Query(default=[], description="Accepted tags; empty means any"),
    pos: Optional[str] = Query(None, description="Exact part of speech"),
    favorites_only: bool = Query(False),
    page_index: int = Query(0, ge=0),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, gt=0, le=500),
) -> QuerySpec:
    return QuerySpec(
        text=text,
        tags=frozenset(tags),
        pos=pos,
        favorites_only=favorites_only,
        page_index=page_index,
        page_size=page_size,
    )


def persist_warning(store: WordStore, before: Optional[PersistenceFailure]) -> Optional[str]:
    """Message for a storage failure raised during the current request, if any."""
    err = store.last_persist_error
    if err is not None and err is not before:
        return str(err)
    return None
