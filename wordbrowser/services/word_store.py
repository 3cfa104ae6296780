# wordbrowser/services/word_store.py
import json
import uuid
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

import structlog

from wordbrowser.core.domain.exceptions import PersistenceFailure
from wordbrowser.core.domain.models import Entry, Tombstone
from wordbrowser.core.domain.normalization import normalize_entries, normalize_entry, parse_override
from wordbrowser.core.ports import KeyValueStorage

logger = structlog.get_logger()

Override = Union[Entry, Tombstone]


class WordStore:
    """
    Authoritative in-memory word collection.

    Layers:
    1. remote     - the loaded dataset, replaced wholesale by load()
    2. overrides  - local upserts and deletion markers, keyed by entry id,
                    persisted under OVERRIDES_KEY
    3. effective  - remote with overrides applied, plus local-only entries
                    appended; rebuilt after every mutation

    Favorites live beside the layers and are persisted under FAVORITES_KEY.

    Storage write failures never escape a mutation: memory is updated first,
    the failure is logged and reported through `on_persist_failure`, and the
    in-memory state stays authoritative for the rest of the session.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        favorites_key: str = "favWords",
        overrides_key: str = "wordbrowser.overrides",
        on_persist_failure: Optional[Callable[[PersistenceFailure], None]] = None,
    ):
        self._storage = storage
        self.favorites_key = favorites_key
        self.overrides_key = overrides_key
        self.on_persist_failure = on_persist_failure
        self.last_persist_error: Optional[PersistenceFailure] = None

        self._remote: Tuple[Entry, ...] = ()
        self._overrides: Dict[str, Override] = {}
        # dict used as an insertion-ordered set
        self._favorites: Dict[str, None] = {}
        self._effective: List[Entry] = []

        self._hydrate()
        self._recompute()

    # =========================================================
    # Views
    # =========================================================

    @property
    def remote(self) -> Tuple[Entry, ...]:
        return self._remote

    @property
    def effective(self) -> List[Entry]:
        return list(self._effective)

    @property
    def overrides(self) -> Dict[str, Override]:
        return dict(self._overrides)

    @property
    def favorites(self) -> FrozenSet[str]:
        return frozenset(self._favorites)

    def get(self, entry_id: str) -> Optional[Entry]:
        for entry in self._effective:
            if entry.id == entry_id:
                return entry
        return None

    def is_favorite(self, key: str) -> bool:
        return key in self._favorites

    def __len__(self) -> int:
        return len(self._effective)

    # =========================================================
    # Mutations
    # =========================================================

    def load(self, remote_entries: Any) -> None:
        """Replace the remote layer. Bad input degrades to an empty dataset."""
        if not isinstance(remote_entries, (list, tuple)) or not remote_entries:
            if remote_entries:
                logger.warning("remote_load_rejected", type=type(remote_entries).__name__)
            self._remote = ()
        else:
            self._remote = tuple(normalize_entries(remote_entries))
        self._recompute()
        logger.info("remote_loaded", count=len(self._remote), effective=len(self._effective))

    def upsert(self, entry: Union[Entry, Mapping[str, Any]]) -> Entry:
        """
        Insert or replace an entry in the override layer.

        Raises:
            ValueError: the entry has no usable word.
        """
        normalized = normalize_entry(entry, derive_id=False)
        if normalized is None:
            raise ValueError("Entry must have a non-empty 'word'.")
        if not normalized.id:
            normalized = normalized.model_copy(update={"id": uuid.uuid4().hex})

        self._overrides[normalized.id] = normalized
        self._persist_overrides()
        self._recompute()
        logger.info("entry_upserted", id=normalized.id, word=normalized.word)
        return normalized

    def remove(self, entry_id: str) -> bool:
        """
        Remove an entry from the effective view.

        Remote entries get a persisted Tombstone so a reload does not bring
        them back; local-only entries are simply dropped from the overrides.
        Returns False when no such entry is visible.
        """
        if self.get(entry_id) is None:
            return False

        if any(e.id == entry_id for e in self._remote):
            self._overrides[entry_id] = Tombstone(id=entry_id)
        else:
            self._overrides.pop(entry_id, None)

        self._persist_overrides()
        self._recompute()
        logger.info("entry_removed", id=entry_id)
        return True

    def toggle_favorite(self, key: str) -> bool:
        """Flip favorite membership; returns the new state."""
        if key in self._favorites:
            del self._favorites[key]
            state = False
        else:
            self._favorites[key] = None
            state = True
        self._persist(self.favorites_key, json.dumps(list(self._favorites), ensure_ascii=False))
        logger.info("favorite_toggled", key=key, favorite=state)
        return state

    def reset(self) -> None:
        """Drop every local edit and deletion marker."""
        self._overrides.clear()
        try:
            self._storage.remove(self.overrides_key)
        except (PersistenceFailure, OSError) as e:
            self._report(self._as_failure(self.overrides_key, e))
        self._recompute()
        logger.info("overrides_reset", effective=len(self._effective))

    # =========================================================
    # Internals
    # =========================================================

    def _recompute(self) -> None:
        remote_ids = set()
        effective: List[Entry] = []
        for entry in self._remote:
            if entry.id in remote_ids and entry.id in self._overrides:
                # duplicate remote id already replaced/removed once
                continue
            remote_ids.add(entry.id)
            override = self._overrides.get(entry.id)
            if override is None:
                effective.append(entry)
            elif isinstance(override, Entry):
                effective.append(override)

        for entry_id, override in self._overrides.items():
            if entry_id not in remote_ids and isinstance(override, Entry):
                effective.append(override)

        self._effective = effective

    def _hydrate(self) -> None:
        favorites = self._read_json_list(self.favorites_key)
        self._favorites = {str(k): None for k in favorites if isinstance(k, str) and k}

        for raw in self._read_json_list(self.overrides_key):
            record = parse_override(raw)
            if record is None:
                continue
            if not record.id:
                logger.warning("override_without_id_skipped", word=getattr(record, "word", ""))
                continue
            self._overrides[record.id] = record

        logger.debug(
            "store_hydrated",
            favorites=len(self._favorites),
            overrides=len(self._overrides),
        )

    def _read_json_list(self, key: str) -> List[Any]:
        raw = self._storage.get(key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning("storage_value_malformed", key=key, error=str(e))
            return []
        if not isinstance(data, list):
            logger.warning("storage_value_not_a_list", key=key)
            return []
        return data

    def _persist_overrides(self) -> None:
        payload = [record.to_raw() for record in self._overrides.values()]
        self._persist(self.overrides_key, json.dumps(payload, ensure_ascii=False))

    def _persist(self, key: str, value: str) -> None:
        try:
            self._storage.set(key, value)
        except (PersistenceFailure, OSError) as e:
            self._report(self._as_failure(key, e))

    @staticmethod
    def _as_failure(key: str, error: Exception) -> PersistenceFailure:
        if isinstance(error, PersistenceFailure):
            return error
        return PersistenceFailure(key, str(error))

    def _report(self, failure: PersistenceFailure) -> None:
        self.last_persist_error = failure
        logger.warning("persist_failed", key=failure.key, reason=failure.reason)
        if self.on_persist_failure is not None:
            self.on_persist_failure(failure)
