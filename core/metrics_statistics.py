from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from core.data import select_month
from core.filters import TransactionFilters


def compute_statistics(filters: TransactionFilters, records: pd.DataFrame) -> Dict[str, Any]:
    df = select_month(records, filters.month)
    if df.empty:
        return {"totalSaleAmount": 0, "totalSoldItems": 0, "totalNotSoldItems": 0}

    sold = df[df["sold"]]
    return {
        "totalSaleAmount": float(sold["price"].sum()),
        "totalSoldItems": int(len(sold)),
        "totalNotSoldItems": int(len(df) - len(sold)),
    }
