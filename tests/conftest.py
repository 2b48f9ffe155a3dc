from __future__ import annotations

import pandas as pd
import pytest

from core.data import RecordStore, normalize_records
from tests.fakes import SAMPLE_RECORDS


@pytest.fixture
def records() -> pd.DataFrame:
    return normalize_records(SAMPLE_RECORDS)


@pytest.fixture
def store() -> RecordStore:
    s = RecordStore()
    s.replace(SAMPLE_RECORDS)
    return s
