"""
Roster view controller.

Owns the roster, the add/edit draft and the dialog mode for one session.
Every mutation goes through this class and is followed by a full persist.
"""

import logging
import time
from dataclasses import replace
from typing import Callable, List, Optional

from gpa_calculator.backend_logic import (
    compute_gpa,
    compute_total_credits,
    decode_semester,
    encode_semester,
)
from gpa_calculator.config import SAVE_CONFIRMATION
from gpa_calculator.models import ClassEntry, Draft, ModalMode
from gpa_calculator.roster_store import RosterStore

logger = logging.getLogger(__name__)

DRAFT_FIELDS = {"name", "grade", "credits", "term", "year"}


def _millis() -> int:
    return time.time_ns() // 1_000_000


class RosterController:

    def __init__(self, store: RosterStore, clock: Callable[[], int] = _millis):
        self.store = store
        self.clock = clock
        self.roster: List[ClassEntry] = store.load()
        for position, entry in enumerate(self.roster):
            if entry.id is None:
                # Legacy rows saved without an id get one in memory
                self.roster[position] = replace(entry, id=self._next_id())
        self.draft = Draft()
        self.mode = ModalMode.CLOSED

    # ------------------------
    # Dialog state
    # ------------------------
    @property
    def is_open(self) -> bool:
        return self.mode is not ModalMode.CLOSED

    def open_add(self) -> None:
        self.draft = Draft()
        self.mode = ModalMode.ADDING

    def open_edit(self, entry: ClassEntry) -> None:
        term, year = decode_semester(entry.semester)
        self.draft = Draft(
            id=entry.id,
            name=entry.name,
            grade=entry.grade,
            credits=entry.credits,
            term=term,
            year=year,
        )
        self.mode = ModalMode.EDITING

    def cancel(self) -> None:
        self.draft = Draft()
        self.mode = ModalMode.CLOSED

    def update_draft(self, **fields) -> None:
        unknown = set(fields) - DRAFT_FIELDS
        if unknown:
            raise ValueError(f"Unknown draft fields: {sorted(unknown)}")

        if "credits" in fields:
            credits = fields["credits"]
            fields["credits"] = int(credits) if credits not in (None, "") else None
        for field_name in ("name", "grade", "term", "year"):
            if field_name in fields and fields[field_name] is None:
                fields[field_name] = ""

        self.draft = replace(self.draft, **fields)

    def is_valid(self) -> bool:
        return self.draft.is_complete()

    # ------------------------
    # Mutations
    # ------------------------
    def _next_id(self) -> int:
        candidate = self.clock()
        highest = max((entry.id for entry in self.roster if isinstance(entry.id, int)), default=None)
        if highest is not None and candidate <= highest:
            candidate = highest + 1
        return candidate

    def submit(self) -> bool:
        """
        Save the draft. Returns False without touching the roster when the
        dialog is closed or a required field is missing or out of range.
        """
        if not self.is_open or not self.is_valid():
            return False

        draft = self.draft
        semester = encode_semester(draft.term, draft.year)

        if self.mode is ModalMode.EDITING and draft.id is not None:
            updated = ClassEntry(
                id=draft.id,
                name=draft.name,
                grade=draft.grade,
                credits=draft.credits,
                semester=semester,
            )
            self.roster = [updated if entry.id == draft.id else entry for entry in self.roster]
            logger.info("Updated class %s (%s)", draft.id, draft.name)
        else:
            new_entry = ClassEntry(
                id=self._next_id(),
                name=draft.name,
                grade=draft.grade,
                credits=draft.credits,
                semester=semester,
            )
            self.roster = self.roster + [new_entry]
            logger.info("Added class %s (%s)", new_entry.id, new_entry.name)

        self.store.persist(self.roster)
        self.cancel()
        return True

    def delete_entry(self, entry_id: int) -> None:
        remaining = [entry for entry in self.roster if entry.id != entry_id]
        if len(remaining) == len(self.roster):
            logger.debug("No class with id %s to delete", entry_id)
        else:
            logger.info("Deleted class %s", entry_id)
        self.roster = remaining
        # An empty roster is written too, so the last delete sticks
        self.store.persist(self.roster)

    def import_entries(self, entries: List[ClassEntry]) -> None:
        """Replace the roster with imported rows, minting fresh ids in order."""
        self.roster = []
        for entry in entries:
            self.roster.append(replace(entry, id=self._next_id()))
        self.store.persist(self.roster)
        logger.info("Imported %d classes", len(self.roster))

    def save(self) -> str:
        self.store.persist(self.roster)
        return SAVE_CONFIRMATION

    # ------------------------
    # Derived values
    # ------------------------
    def gpa(self) -> str:
        return compute_gpa(self.roster)

    def total_credits(self) -> int:
        return compute_total_credits(self.roster)

    def find(self, entry_id: int) -> Optional[ClassEntry]:
        for entry in self.roster:
            if entry.id == entry_id:
                return entry
        return None
