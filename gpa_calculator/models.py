"""
Roster data models.

ClassEntry is one recorded course, Draft is the add/edit form while the
dialog is open, ModalMode is the dialog state.
"""

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional

from gpa_calculator.config import CREDIT_OPTIONS, GRADE_OPTIONS

logger = logging.getLogger(__name__)


class ModalMode(Enum):
    CLOSED = "closed"
    ADDING = "adding"
    EDITING = "editing"


def _coerce_credits(value: Any) -> Optional[int]:
    """Whole-number credits from stored data; anything else becomes None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning("Dropping unreadable credits %r from saved class", value)
        return None
    if number != number or not number.is_integer():
        logger.warning("Dropping non-whole credits %r from saved class", value)
        return None
    return int(number)


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass
class ClassEntry:
    """
    A single course on the roster.

    Attributes:
        id: Unique token minted at creation, never reused
        name: Class name as typed by the student
        grade: Letter grade (A .. F)
        credits: Credit count, 1 to 6
        semester: Encoded semester such as "FA 24"; None on legacy entries
    """
    id: int
    name: str
    grade: str
    credits: Optional[int]
    semester: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if data["semester"] is None:
            del data["semester"]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassEntry":
        # Partial legacy rows stay on the roster; only the types are normalised
        entry_id = data.get("id")
        semester = data.get("semester")
        return cls(
            id=entry_id if isinstance(entry_id, int) and not isinstance(entry_id, bool) else None,
            name=_coerce_text(data.get("name")),
            grade=_coerce_text(data.get("grade")),
            credits=_coerce_credits(data.get("credits")),
            semester=semester if isinstance(semester, str) else None,
        )


@dataclass
class Draft:
    """In-progress form values. term/year only exist here, never in storage."""
    id: Optional[int] = None
    name: str = ""
    grade: str = ""
    credits: Optional[int] = None
    term: str = ""
    year: str = ""

    def is_complete(self) -> bool:
        if not (self.name and self.grade and self.credits and self.term and self.year):
            return False
        return self.grade in GRADE_OPTIONS and self.credits in CREDIT_OPTIONS
