# wordbrowser/adapters/api/routers/favorites.py
from typing import Dict, List

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from wordbrowser.adapters.api.dependencies import persist_warning
from wordbrowser.adapters.api.schemas import FavoriteOut
from wordbrowser.services.word_store import WordStore
from wordbrowser.shared.container import Container

router = APIRouter(prefix="/favorites", tags=["Favorites"])


@router.get("")
@inject
async def list_favorites(
    store: WordStore = Depends(Provide[Container.word_store]),
) -> Dict[str, List[str]]:
    return {"favorites": sorted(store.favorites)}


@router.post("/{key}", response_model=FavoriteOut)
@inject
async def toggle_favorite(
    key: str,
    store: WordStore = Depends(Provide[Container.word_store]),
) -> FavoriteOut:
    before = store.last_persist_error
    state = store.toggle_favorite(key)
    return FavoriteOut(key=key, favorite=state, warning=persist_warning(store, before))
