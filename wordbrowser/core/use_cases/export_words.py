# wordbrowser/core/use_cases/export_words.py
import json
from pathlib import Path

import structlog

from wordbrowser.services.word_store import WordStore

logger = structlog.get_logger()


class ExportWords:
    """Use Case: serialize the effective collection in the words.json shape."""

    def __init__(self, store: WordStore):
        self.store = store

    def execute(self) -> str:
        payload = [entry.to_raw() for entry in self.store.effective]
        return json.dumps(payload, indent=2, ensure_ascii=False)

    def write(self, path: str) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.execute() + "\n", encoding="utf-8")
        logger.info("words_exported", path=str(target), count=len(self.store))
        return target
