# wordbrowser/core/domain/models.py
from __future__ import annotations

from typing import Any, Dict, FrozenSet, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# Raw icon prefixes as they appear in words.json
INLINE_PREFIX = "svg:"
GLYPH_PREFIX = "char:"


class IconRef(BaseModel):
    """
    Tagged icon reference, decided once when the entry is normalized.

    - inline: raw markup carried in the dataset ("svg:<svg ...>")
    - glyph:  a single display character ("char:α")
    - file:   a filename relative to the icon directory ("sun.svg")
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["inline", "glyph", "file"]
    value: str

    @classmethod
    def parse(cls, raw: Any) -> Optional["IconRef"]:
        if not isinstance(raw, str) or not raw.strip():
            return None
        if raw.startswith(INLINE_PREFIX):
            return cls(kind="inline", value=raw[len(INLINE_PREFIX):])
        if raw.startswith(GLYPH_PREFIX):
            return cls(kind="glyph", value=raw[len(GLYPH_PREFIX):])
        return cls(kind="file", value=raw.strip())

    def to_raw(self) -> str:
        if self.kind == "inline":
            return INLINE_PREFIX + self.value
        if self.kind == "glyph":
            return GLYPH_PREFIX + self.value
        return self.value


class Entry(BaseModel):
    """One dictionary item. Optional fields are never None."""

    id: str = ""
    word: str
    pos: str = ""
    definition: str = ""
    usage: str = ""
    etymology: str = ""
    tags: List[str] = Field(default_factory=list)
    related: List[str] = Field(default_factory=list)
    icon: Optional[IconRef] = None

    def to_raw(self) -> Dict[str, Any]:
        """Dataset/storage shape: icon flattened back to its prefixed string."""
        raw = self.model_dump(exclude={"icon"})
        if self.icon is not None:
            raw["icon"] = self.icon.to_raw()
        return raw


class Tombstone(BaseModel):
    """Persisted deletion marker for an entry that lives in the remote dataset."""
    model_config = ConfigDict(frozen=True)

    id: str
    deleted: Literal[True] = True

    def to_raw(self) -> Dict[str, Any]:
        return {"id": self.id, "deleted": True}


class QuerySpec(BaseModel):
    """
    Filter/sort/paginate parameters.

    An empty `tags` set means "no tag restriction", not "match nothing".
    """
    model_config = ConfigDict(frozen=True)

    text: str = ""
    tags: FrozenSet[str] = frozenset()
    pos: Optional[str] = None
    favorites_only: bool = False
    page_index: int = Field(0, ge=0)
    page_size: int = Field(20, gt=0)

    @classmethod
    def defaults(cls, tags: Optional[List[str]] = None, page_size: int = 20) -> "QuerySpec":
        """The "reset filters" state: no text, favorites off, default tag set."""
        return cls(tags=frozenset(tags or ()), page_size=page_size)


class Page(BaseModel):
    items: List[Entry] = Field(default_factory=list)
    total: int = 0
    has_more: bool = False


__all__ = ["IconRef", "Entry", "Tombstone", "QuerySpec", "Page"]
