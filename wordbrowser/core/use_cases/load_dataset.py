# wordbrowser/core/use_cases/load_dataset.py
from typing import Optional

import structlog
from pydantic import BaseModel

from wordbrowser.core.domain.exceptions import DataFormatInvalid, DataLoadFailure
from wordbrowser.core.ports import DatasetSource
from wordbrowser.services.word_store import WordStore

logger = structlog.get_logger()


class LoadResult(BaseModel):
    count: int
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class LoadDataset:
    """
    Use Case: fetch the remote word list and hand it to the store.

    A missing or malformed dataset is not fatal: the store is loaded with an
    empty remote layer (local entries still show), and the returned
    LoadResult carries a message fit for display.
    """

    def __init__(self, source: DatasetSource, store: WordStore):
        self.source = source
        self.store = store

    def execute(self) -> LoadResult:
        logger.info("dataset_load_started")
        try:
            payload = self.source.fetch()
        except DataLoadFailure as e:
            logger.error("dataset_load_failed", error=str(e), attempts=e.attempts)
            self.store.load([])
            return LoadResult(count=0, error=f"Could not load dictionary data: {e}")
        except DataFormatInvalid as e:
            logger.error("dataset_format_invalid", error=str(e))
            self.store.load([])
            return LoadResult(count=0, error=f"Dictionary data is malformed: {e}")

        self.store.load(payload)
        return LoadResult(count=len(self.store.remote))
