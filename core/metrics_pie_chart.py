from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from core.data import select_month
from core.filters import TransactionFilters


def compute_pie_chart(filters: TransactionFilters, records: pd.DataFrame) -> List[Dict[str, Any]]:
    """Record count per category present in the month, in first-seen order."""
    df = select_month(records, filters.month)
    if df.empty:
        return []
    counts = df.groupby("category", sort=False).size()
    return [{"_id": str(category), "count": int(count)} for category, count in counts.items()]
