# wordbrowser/services/query_engine.py
"""
Search / filter / sort / paginate over an in-memory entry sequence.

Everything here is a pure function of its arguments: no I/O, no state kept
between calls. Callers own the notion of "current page" and bump
`page_index` themselves for load-more.
"""

from __future__ import annotations

from typing import AbstractSet, FrozenSet, List, Optional, Sequence

from wordbrowser.core.domain.models import Entry, Page, QuerySpec
from wordbrowser.core.domain.normalization import collation_key, normalize_whitespace

__all__ = ["query", "matches", "alphabet_index", "select_letter"]


def _haystack(entry: Entry) -> str:
    # newline keeps a query from matching across two fields
    fields = (entry.word, entry.definition, entry.usage)
    return "\n".join(normalize_whitespace(f) for f in fields).lower()


def matches(
    entry: Entry,
    *,
    needle: str,
    accepted_tags: FrozenSet[str],
    pos: Optional[str],
    favorites_only: bool,
    favorites: AbstractSet[str],
) -> bool:
    """
    Apply the filter predicates in order; the first failure excludes.

    1. favorites-only
    2. tag intersection (skipped when accepted_tags is empty)
    3. exact part of speech
    4. free-text substring over word / definition / usage
    """
    if favorites_only and entry.id not in favorites and entry.word not in favorites:
        return False
    if accepted_tags and not accepted_tags.intersection(t.casefold() for t in entry.tags):
        return False
    if pos is not None and entry.pos != pos:
        return False
    if needle and needle not in _haystack(entry):
        return False
    return True


def query(
    entries: Sequence[Entry],
    spec: QuerySpec,
    favorites: AbstractSet[str] = frozenset(),
) -> Page:
    """
    Run `spec` over `entries` and return one page of results.

    Args:
        entries: The effective collection, in original order.
        spec: Filter and paging parameters.
        favorites: Favorite keys (entry ids or words); only consulted when
            `spec.favorites_only` is set.

    Returns:
        Page with the requested slice, the filtered total and a has_more flag.
        A page index past the end yields no items and has_more=False.
    """
    # same normalization as stored words, so a word always finds itself
    needle = normalize_whitespace(spec.text).lower()
    accepted = frozenset(t.strip().casefold() for t in spec.tags if t.strip())
    pos = spec.pos.strip() if spec.pos and spec.pos.strip() else None

    hits = [
        e for e in entries
        if matches(
            e,
            needle=needle,
            accepted_tags=accepted,
            pos=pos,
            favorites_only=spec.favorites_only,
            favorites=favorites,
        )
    ]
    # list.sort is stable: equal keys keep collection order
    hits.sort(key=lambda e: collation_key(e.word))

    total = len(hits)
    start = spec.page_index * spec.page_size
    if start >= total:
        return Page(items=[], total=total, has_more=False)
    end = min(total, start + spec.page_size)
    return Page(items=hits[start:end], total=total, has_more=end < total)


def alphabet_index(entries: Sequence[Entry]) -> List[str]:
    """Distinct upper-cased first characters of every word, by code point."""
    letters = {e.word[:1].upper() for e in entries if e.word}
    return sorted(letters)


def select_letter(spec: QuerySpec, letter: str) -> QuerySpec:
    """
    Jump to a letter of the index.

    This is only a text query for that letter, so it goes through the normal
    substring match. An empty letter is the "All" button.
    """
    return spec.model_copy(update={"text": letter.strip(), "page_index": 0})
