# wordbrowser/adapters/api/routers/health.py
from typing import Any, Dict

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Request

from wordbrowser.services.word_store import WordStore
from wordbrowser.shared.container import Container

router = APIRouter(tags=["Health"])


@router.get("/health")
@inject
async def health(
    request: Request,
    store: WordStore = Depends(Provide[Container.word_store]),
) -> Dict[str, Any]:
    """Liveness plus the outcome of the initial dataset load."""
    result = getattr(request.app.state, "load_result", None)
    return {
        "status": "ok" if result is None or result.ok else "degraded",
        "entries": len(store),
        "remote": len(store.remote),
        "load_error": result.error if result is not None else None,
    }
