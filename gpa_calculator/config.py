import os
from pathlib import Path

# ------------------------
# Page
# ------------------------
PAGE_TITLE = "GPA Calculator"
CLASS_LIST_HEIGHT = 350

# ------------------------
# Grades, credits, semesters
# ------------------------
GRADE_OPTIONS = ["A", "A-", "B+", "B", "B-", "C+", "C", "C-", "D", "F"]

CREDIT_OPTIONS = [1, 2, 3, 4, 5, 6]

TERM_OPTIONS = ["Fall", "Spring", "Summer", "Winter"]

TERM_ABBREVIATIONS = {
    "Spring": "SP",
    "Fall": "FA",
    "Summer": "SM",
    "Winter": "WN",
}

# ------------------------
# Persistence
# ------------------------
STORAGE_KEY = "gpa-calculator-classes"
SAVE_CONFIRMATION = "Data saved successfully!"

DEFAULT_DATA_DIR = Path.home() / ".gpa_calculator"


def data_dir() -> Path:
    """Directory of the file-backed store. Read from the environment on every call."""
    return Path(os.environ.get("GPA_CALCULATOR_DATA_DIR", DEFAULT_DATA_DIR))


def log_level() -> str:
    return os.environ.get("GPA_CALCULATOR_LOG_LEVEL", "INFO").upper()
