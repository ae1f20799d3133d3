import sys
import os

import pytest

# Ensure repo root on sys.path for imports like `gpa_calculator...`
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from gpa_calculator.kv_store import MemoryKeyValueStore
from gpa_calculator.roster_store import RosterStore


class CountingStore(MemoryKeyValueStore):
    """Memory store that records how many writes it saw."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.writes = 0

    def set(self, key, value):
        self.writes += 1
        super().set(key, value)


@pytest.fixture
def kv():
    return CountingStore()


@pytest.fixture
def roster_store(kv):
    return RosterStore(kv)
