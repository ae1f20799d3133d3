from typing import List

import pandas as pd

from gpa_calculator.config import CREDIT_OPTIONS, GRADE_OPTIONS
from gpa_calculator.models import ClassEntry

# ------------------------
# CSV helpers (UI-side)
# ------------------------
CSV_COLUMNS = ["Name", "Grade", "Credits", "Semester"]


def _normalise_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]
    # allow singular "credit"
    if "credit" in df.columns and "credits" not in df.columns:
        df = df.rename(columns={"credit": "credits"})
    return df


def read_csv_upload(uploaded_file) -> pd.DataFrame:
    df = pd.read_csv(uploaded_file, dtype=str, keep_default_na=False)
    return _normalise_cols(df)


def validate_roster_csv(df: pd.DataFrame) -> pd.DataFrame:
    required = {"name", "grade", "credits"}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns: {sorted(missing)}. Expected: Name, Grade, Credits, Semester.")
    out = df.copy()
    if "semester" not in out.columns:
        out["semester"] = ""
    out = out[["name", "grade", "credits", "semester"]]
    return out.rename(columns={c.lower(): c for c in CSV_COLUMNS})


def parse_roster(df: pd.DataFrame) -> List[ClassEntry]:
    """
    Turn a validated frame into entries with placeholder ids (0).
    Every row must be a complete class; the first bad row raises ValueError.
    """
    entries = []
    for idx, row in df.iterrows():
        line = idx + 2  # header is line 1
        name = str(row.get("Name", "")).strip()
        grade = str(row.get("Grade", "")).strip().upper()
        credits_raw = str(row.get("Credits", "")).strip()
        semester = str(row.get("Semester", "")).strip() or None

        if not name:
            raise ValueError(f"Row {line}: class name is empty.")
        if grade not in GRADE_OPTIONS:
            raise ValueError(f"Row {line}: grade {grade!r} is not one of {', '.join(GRADE_OPTIONS)}.")
        try:
            credits = int(float(credits_raw))
        except ValueError:
            raise ValueError(f"Row {line}: credits {credits_raw!r} is not a number.") from None
        if credits not in CREDIT_OPTIONS:
            raise ValueError(f"Row {line}: credits must be between 1 and 6 (got {credits}).")

        entries.append(ClassEntry(id=0, name=name, grade=grade, credits=credits, semester=semester))
    return entries


def roster_frame(roster: List[ClassEntry]) -> pd.DataFrame:
    rows = [
        {
            "Name": entry.name,
            "Grade": entry.grade,
            "Credits": entry.credits,
            "Semester": entry.semester or "",
        }
        for entry in roster
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def roster_to_csv(roster: List[ClassEntry]) -> bytes:
    return roster_frame(roster).to_csv(index=False).encode("utf-8")
