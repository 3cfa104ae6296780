# wordbrowser/core/domain/normalization.py
"""
wordbrowser.core.domain.normalization
=====================================

Turns raw dataset / storage records into `Entry` objects and provides the
comparison keys used by the query engine.

Design goals
------------
- Tolerant of messy JSON: missing fields, `null`s, numbers where strings are
  expected, `tags` that is a string instead of an array.
- Every optional field ends up as "" or [] so matching never faults.
- Icon strings are parsed into an `IconRef` here, once.
- Deterministic: same input, same output.

Typical usage
-------------
>>> from wordbrowser.core.domain.normalization import normalize_entry
>>> normalize_entry({"word": "  Ama ", "tags": "core"}).tags
[]
"""

from __future__ import annotations

import re
import unicodedata
from typing import Any, List, Mapping, Optional, Tuple, Union

import structlog

from wordbrowser.core.domain.models import Entry, IconRef, Tombstone

logger = structlog.get_logger()

__all__ = [
    "clean_text",
    "normalize_whitespace",
    "strip_diacritics",
    "collation_key",
    "normalize_entry",
    "normalize_entries",
    "parse_override",
]

# Matches any run of Unicode whitespace characters.
_WHITESPACE_RE = re.compile(r"\s+")

# Zero-width and copy/paste control characters that create invisible mismatches.
_STRIP_CODEPOINTS = {
    "\u200B",  # ZERO WIDTH SPACE
    "\u200C",  # ZERO WIDTH NON-JOINER
    "\u200D",  # ZERO WIDTH JOINER
    "\u2060",  # WORD JOINER
    "\uFEFF",  # ZERO WIDTH NO-BREAK SPACE (BOM)
}

_TEXT_FIELDS = ("pos", "etymology")
# searchable alongside `word`, so they get the same normalization
_SEARCH_FIELDS = ("definition", "usage")


def _strip_invisible_controls(text: str) -> str:
    for ch in _STRIP_CODEPOINTS:
        if ch in text:
            text = text.replace(ch, "")
    return text


def clean_text(value: Any) -> str:
    """
    Coerce a scalar field to a trimmed string.

    None and containers become "". Numbers are stringified.
    """
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return ""
    if isinstance(value, bool):
        return ""
    if not isinstance(value, str):
        value = str(value)
    return _strip_invisible_controls(value).strip()


def normalize_whitespace(text: str) -> str:
    """
    Collapse and trim whitespace in a Unicode-safe way.

    Steps:
      * Unicode NFKC normalization for consistency.
      * Collapse all whitespace runs to a single ASCII space.
      * Strip leading and trailing spaces.
    """
    if not isinstance(text, str):
        return ""
    text = unicodedata.normalize("NFKC", text)
    text = _strip_invisible_controls(text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def strip_diacritics(text: str) -> str:
    """
    Strip combining diacritics while preserving base characters.

    Example:
        'éàï' -> 'eai'
    """
    if not isinstance(text, str):
        return ""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return unicodedata.normalize("NFC", stripped)


def collation_key(word: str) -> Tuple[str, str]:
    """
    Locale-aware, case-insensitive sort key.

    Primary level ignores case and accents ("élan" sorts with "elan"),
    secondary level orders accented variants after their base form. Words that
    differ only by case produce identical keys, so a stable sort keeps their
    original order.
    """
    folded = normalize_whitespace(word).casefold()
    return strip_diacritics(folded), folded


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    out: List[str] = []
    for item in value:
        text = clean_text(item)
        if text:
            out.append(text)
    return out


def normalize_entry(raw: Any, *, derive_id: bool = True) -> Optional[Entry]:
    """
    Build an `Entry` from a raw mapping.

    Args:
        raw: A dict from the dataset or storage, or an existing Entry.
        derive_id: When the record has no id, use its word as id
            (remote dataset convention). Locally added entries get a
            generated id from the store instead.

    Returns:
        The normalized Entry, or None when the record has no usable word.
    """
    if isinstance(raw, Entry):
        raw = raw.to_raw()
    if not isinstance(raw, Mapping):
        logger.warning("entry_skipped_not_mapping", type=type(raw).__name__)
        return None

    word = normalize_whitespace(clean_text(raw.get("word")))
    if not word:
        logger.warning("entry_skipped_empty_word", id=clean_text(raw.get("id")))
        return None

    tags = _string_list(raw.get("tags"))
    # Older word lists carry a single "rarity" value instead of tags.
    rarity = clean_text(raw.get("rarity"))
    if not tags and rarity:
        tags = [rarity]

    entry_id = clean_text(raw.get("id"))
    if not entry_id and derive_id:
        entry_id = word

    fields = {name: clean_text(raw.get(name)) for name in _TEXT_FIELDS}
    fields.update(
        (name, normalize_whitespace(clean_text(raw.get(name)))) for name in _SEARCH_FIELDS
    )

    return Entry(
        id=entry_id,
        word=word,
        tags=tags,
        related=_string_list(raw.get("related")),
        icon=IconRef.parse(raw.get("icon")),
        **fields,
    )


def normalize_entries(payload: Any) -> List[Entry]:
    """
    Normalize a whole dataset payload.

    A non-list payload yields an empty list; bad items are skipped.
    """
    if not isinstance(payload, (list, tuple)):
        if payload is not None:
            logger.warning("dataset_not_a_sequence", type=type(payload).__name__)
        return []
    entries: List[Entry] = []
    for item in payload:
        entry = normalize_entry(item)
        if entry is not None:
            entries.append(entry)
    return entries


def parse_override(raw: Any) -> Optional[Union[Entry, Tombstone]]:
    """Decode one persisted override record: either a tombstone or an entry."""
    if isinstance(raw, Mapping) and raw.get("deleted") is True:
        entry_id = clean_text(raw.get("id"))
        return Tombstone(id=entry_id) if entry_id else None
    return normalize_entry(raw)
