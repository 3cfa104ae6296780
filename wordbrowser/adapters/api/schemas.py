# wordbrowser/adapters/api/schemas.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from wordbrowser.core.domain.models import Entry


class EntryIn(BaseModel):
    """Request body for add/edit. `icon` uses the raw words.json string form."""
    id: Optional[str] = None
    word: str = Field(..., min_length=1)
    pos: str = ""
    definition: str = ""
    usage: str = ""
    etymology: str = ""
    tags: List[str] = Field(default_factory=list)
    related: List[str] = Field(default_factory=list)
    icon: Optional[str] = None

    def to_raw(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class MutationOut(BaseModel):
    status: str = "ok"
    entry: Optional[Entry] = None
    # Set when the change is applied in memory but could not be saved
    warning: Optional[str] = None


class FavoriteOut(BaseModel):
    key: str
    favorite: bool
    warning: Optional[str] = None
