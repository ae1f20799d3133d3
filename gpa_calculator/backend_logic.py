import logging
from decimal import Decimal, ROUND_HALF_UP
from fractions import Fraction
from typing import Iterable, List, Optional, Tuple

from gpa_calculator.config import TERM_ABBREVIATIONS
from gpa_calculator.models import ClassEntry

logger = logging.getLogger(__name__)

# ------------------------
# Core logic
# ------------------------
GRADE_POINTS = {
    "A": Decimal("4.00"),
    "A-": Decimal("3.67"),
    "B+": Decimal("3.33"),
    "B": Decimal("3.00"),
    "B-": Decimal("2.67"),
    "C+": Decimal("2.33"),
    "C": Decimal("2.00"),
    "C-": Decimal("1.67"),
    "D": Decimal("1.00"),
    "F": Decimal("0.00"),
}

MAX_GPA_PLACES = 3


def round_half_up(x: Fraction, places: int) -> Decimal:
    exact = Decimal(x.numerator) / Decimal(x.denominator)
    return exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def format_shortest_decimal(value: Fraction, max_places: int = MAX_GPA_PLACES) -> str:
    """
    Render value with the fewest decimal places (0..max_places) that
    reproduce it exactly. Values that need more places are rounded half-up
    to max_places.

        Fraction(4)        -> "4"
        Fraction(7, 2)     -> "3.5"
        Fraction(367, 100) -> "3.67"
        Fraction(1067, 300) -> "3.557"
    """
    for places in range(max_places + 1):
        scaled = value * 10 ** places
        if scaled.denominator == 1:
            return str(Decimal(scaled.numerator).scaleb(-places))
    return str(round_half_up(value, max_places))


def gpa_inputs(entries: Iterable[ClassEntry]) -> List[Tuple[Decimal, int]]:
    """
    (grade points, credits) pairs for the entries that count towards the GPA.
    Entries without a grade or with falsy credits are left out; so are
    grades outside the 4.0 table, which only legacy data can carry.
    """
    rows = []
    for entry in entries:
        if not entry.grade or not entry.credits:
            continue
        points = GRADE_POINTS.get(entry.grade)
        if points is None:
            logger.warning("Ignoring class %r with unknown grade %r", entry.name, entry.grade)
            continue
        rows.append((points, int(entry.credits)))
    return rows


def weighted_gpa(entries: Iterable[ClassEntry]) -> Tuple[Optional[Fraction], int]:
    """
    returns: (credit-weighted grade point average, credits counted)
    The average is None when no credits count.
    """
    rows = gpa_inputs(entries)
    total_points = Fraction(0)
    total_credits = 0
    for points, credits in rows:
        total_points += Fraction(points) * credits
        total_credits += credits

    if total_credits == 0:
        return None, 0
    return total_points / total_credits, total_credits


def compute_gpa(entries: List[ClassEntry]) -> str:
    if len(entries) == 0:
        return "0"

    gpa, _ = weighted_gpa(entries)
    if gpa is None:
        return "0"
    return format_shortest_decimal(gpa)


def compute_total_credits(entries: Iterable[ClassEntry]) -> int:
    # Every entry counts here, graded or not
    return sum(entry.credits or 0 for entry in entries)


# ------------------------
# Semester encoding
# ------------------------
FULL_TERM_NAMES = {abbr: term for term, abbr in TERM_ABBREVIATIONS.items()}


def term_abbreviation(full_term: str) -> str:
    return TERM_ABBREVIATIONS.get(full_term, full_term)


def full_term_name(abbreviation: str) -> str:
    return FULL_TERM_NAMES.get(abbreviation, abbreviation)


def encode_semester(term: str, year: str) -> str:
    """("Fall", "24") -> "FA 24"."""
    return f"{term_abbreviation(term)} {year}"


def decode_semester(semester: Optional[str]) -> Tuple[str, str]:
    """
    "FA 24" -> ("Fall", "24"). Anything that is not exactly two
    space-separated tokens decodes to ("", "").
    """
    if not semester:
        return "", ""
    parts = semester.split(" ")
    if len(parts) != 2:
        return "", ""
    return full_term_name(parts[0]), parts[1]


# ------------------------
# Display helpers
# ------------------------
GRADE_COLORS = {
    "A": "green",
    "A-": "green",
    "B+": "yellow",
    "B": "yellow",
    "B-": "orange",
    "C+": "orange",
    "C": "orange",
    "C-": "red",
    "D": "red",
    "F": "red",
}


def grade_color(grade: str) -> str:
    """Streamlit markdown color for the grade badge."""
    return GRADE_COLORS.get(grade, "gray")


def year_options() -> List[str]:
    return [f"{i:02d}" for i in range(100)]


def credit_label(credits: Optional[int]) -> str:
    credits = credits or 0
    return f"{credits} credit{'' if credits == 1 else 's'}"
