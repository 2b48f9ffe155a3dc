from __future__ import annotations

import math
from typing import Any, Dict

import pandas as pd

from core.data import frame_to_records, month_mask, search_mask
from core.filters import TransactionFilters


def compute_transactions(filters: TransactionFilters, records: pd.DataFrame) -> Dict[str, Any]:
    """One page of matching records plus the pre-pagination total."""
    mask = search_mask(records, filters.search)
    if filters.month is not None:
        mask = mask & month_mask(records, filters.month)
    matched = records[mask]

    total = int(len(matched))
    page = matched.iloc[filters.skip : filters.skip + filters.per_page]
    return {
        "transactions": frame_to_records(page),
        "total": total,
        "page": filters.page,
        "perPage": filters.per_page,
        "totalPages": math.ceil(total / filters.per_page),
    }
