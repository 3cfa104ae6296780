# wordbrowser/adapters/icons.py
"""
Icon resolution for display.

Each entry's icon resolves on its own: one failing file never affects another
entry, and `resolve_many` makes no promise about completion order beyond
returning results aligned with its input.
"""

import asyncio
from pathlib import Path
from typing import List, Literal, Sequence

import aiofiles
import structlog
from pydantic import BaseModel

from wordbrowser.core.domain.exceptions import IconResolutionFailure
from wordbrowser.core.domain.models import Entry

logger = structlog.get_logger()

PLACEHOLDER = "?"


class ResolvedIcon(BaseModel):
    kind: Literal["inline", "glyph", "file", "fallback", "placeholder"]
    content: str


class IconResolver:
    def __init__(self, icon_dir: str):
        self.icon_dir = Path(icon_dir).resolve()

    async def resolve(self, entry: Entry) -> ResolvedIcon:
        icon = entry.icon
        if icon is None:
            return ResolvedIcon(kind="fallback", content=entry.word[:1] or PLACEHOLDER)
        if icon.kind == "inline":
            return ResolvedIcon(kind="inline", content=icon.value)
        if icon.kind == "glyph":
            return ResolvedIcon(kind="glyph", content=icon.value or PLACEHOLDER)

        try:
            markup = await self._read(icon.value)
        except IconResolutionFailure as e:
            logger.warning("icon_unresolved", id=entry.id, icon=icon.value, error=str(e))
            return ResolvedIcon(kind="placeholder", content=PLACEHOLDER)
        return ResolvedIcon(kind="file", content=markup)

    async def resolve_many(self, entries: Sequence[Entry]) -> List[ResolvedIcon]:
        return list(await asyncio.gather(*(self.resolve(e) for e in entries)))

    async def _read(self, name: str) -> str:
        # ValueError covers NUL bytes in the name and undecodable file content
        try:
            path = (self.icon_dir / name).resolve()
            if not path.is_relative_to(self.icon_dir):
                raise IconResolutionFailure(f"icon path escapes icon directory: {name}")
            async with aiofiles.open(path, mode="r", encoding="utf-8") as f:
                return await f.read()
        except (OSError, ValueError) as e:
            raise IconResolutionFailure(f"{name!r}: {e}") from e
