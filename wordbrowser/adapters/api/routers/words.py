# wordbrowser/adapters/api/routers/words.py
from typing import Dict, List, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from wordbrowser.adapters.api.dependencies import persist_warning, query_spec
from wordbrowser.adapters.api.schemas import EntryIn, MutationOut
from wordbrowser.adapters.icons import IconResolver, ResolvedIcon
from wordbrowser.core.domain.models import Entry, Page, QuerySpec
from wordbrowser.core.use_cases.export_words import ExportWords
from wordbrowser.services import query_engine
from wordbrowser.services.word_store import WordStore
from wordbrowser.shared.container import Container

router = APIRouter(prefix="/words", tags=["Words"])

# Whole-collection routes live outside /words so no entry id can shadow them.
collection_router = APIRouter(tags=["Words"])


@router.get("", response_model=Page)
@inject
async def search_words(
    spec: QuerySpec = Depends(query_spec),
    letter: Optional[str] = Query(None, max_length=1, description="Alphabet index shortcut"),
    store: WordStore = Depends(Provide[Container.word_store]),
) -> Page:
    """Filter, sort and page the effective collection."""
    if letter is not None:
        spec = query_engine.select_letter(spec, letter)
    return query_engine.query(store.effective, spec, store.favorites)


@collection_router.get("/letters")
@inject
async def list_letters(
    store: WordStore = Depends(Provide[Container.word_store]),
) -> Dict[str, List[str]]:
    return {"letters": query_engine.alphabet_index(store.effective)}


@collection_router.get("/export")
@inject
async def export_words(
    use_case: ExportWords = Depends(Provide[Container.export_words]),
) -> Response:
    return Response(
        content=use_case.execute(),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="words.json"'},
    )


@collection_router.post("/reset", response_model=MutationOut)
@inject
async def reset_words(
    store: WordStore = Depends(Provide[Container.word_store]),
) -> MutationOut:
    """Discard local edits and deletions."""
    before = store.last_persist_error
    store.reset()
    return MutationOut(status="reset", warning=persist_warning(store, before))


@router.get("/{entry_id}", response_model=Entry)
@inject
async def get_word(
    entry_id: str,
    store: WordStore = Depends(Provide[Container.word_store]),
) -> Entry:
    entry = store.get(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Entry '{entry_id}' not found")
    return entry


@router.get("/{entry_id}/icon", response_model=ResolvedIcon)
@inject
async def get_word_icon(
    entry_id: str,
    store: WordStore = Depends(Provide[Container.word_store]),
    resolver: IconResolver = Depends(Provide[Container.icon_resolver]),
) -> ResolvedIcon:
    entry = store.get(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Entry '{entry_id}' not found")
    return await resolver.resolve(entry)


@router.post("", response_model=MutationOut, status_code=status.HTTP_201_CREATED)
@inject
async def add_word(
    body: EntryIn,
    store: WordStore = Depends(Provide[Container.word_store]),
) -> MutationOut:
    return _upsert(store, body.to_raw())


@router.put("/{entry_id}", response_model=MutationOut)
@inject
async def edit_word(
    entry_id: str,
    body: EntryIn,
    store: WordStore = Depends(Provide[Container.word_store]),
) -> MutationOut:
    raw = body.to_raw()
    raw["id"] = entry_id
    return _upsert(store, raw)


@router.delete("/{entry_id}", response_model=MutationOut)
@inject
async def delete_word(
    entry_id: str,
    store: WordStore = Depends(Provide[Container.word_store]),
) -> MutationOut:
    before = store.last_persist_error
    if not store.remove(entry_id):
        raise HTTPException(status_code=404, detail=f"Entry '{entry_id}' not found")
    return MutationOut(status="deleted", warning=persist_warning(store, before))


def _upsert(store: WordStore, raw: dict) -> MutationOut:
    before = store.last_persist_error
    try:
        entry = store.upsert(raw)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return MutationOut(status="saved", entry=entry, warning=persist_warning(store, before))
