import json
import logging
from typing import List

from gpa_calculator.config import STORAGE_KEY
from gpa_calculator.models import ClassEntry

logger = logging.getLogger(__name__)


class RosterStore:
    """
    Saves and restores the whole roster under one fixed key.

    The store is anything with get(key) -> Optional[str] and
    set(key, value). Writes always overwrite the full list.
    """

    def __init__(self, kv_store, key: str = STORAGE_KEY):
        self.kv_store = kv_store
        self.key = key

    def load(self) -> List[ClassEntry]:
        try:
            raw = self.kv_store.get(self.key)
            if not raw:
                return []
            parsed = json.loads(raw)
        except (OSError, ValueError):
            # UnicodeDecodeError and JSONDecodeError are both ValueErrors
            logger.exception("Error loading saved classes from %r", self.key)
            return []

        if not isinstance(parsed, list) or not all(isinstance(row, dict) for row in parsed):
            logger.error("Saved classes under %r are not a list of objects; starting empty", self.key)
            return []

        entries = [ClassEntry.from_dict(row) for row in parsed]
        logger.info("Loaded %d saved classes", len(entries))
        return entries

    def persist(self, roster: List[ClassEntry]) -> None:
        payload = json.dumps([entry.to_dict() for entry in roster])
        self.kv_store.set(self.key, payload)
        logger.debug("Persisted %d classes under %r", len(roster), self.key)
