from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from core.data import select_month
from core.filters import TransactionFilters

# Half-open [lower, upper) price bounds; anything else goes to the last bucket.
PRICE_BUCKET_EDGES = [0, 101, 201, 301, 401, 501, 601, 701, 801, 901]
PRICE_BUCKET_LABELS = [
    "0-100",
    "101-200",
    "201-300",
    "301-400",
    "401-500",
    "501-600",
    "601-700",
    "701-800",
    "801-900",
    "901-above",
]


def compute_bar_chart(filters: TransactionFilters, records: pd.DataFrame) -> List[Dict[str, Any]]:
    df = select_month(records, filters.month)
    bounded_labels = PRICE_BUCKET_LABELS[:-1]

    bucketed = pd.cut(df["price"], bins=PRICE_BUCKET_EDGES, right=False, labels=bounded_labels)
    counts = bucketed.value_counts().reindex(bounded_labels, fill_value=0)
    catch_all = int(len(df)) - int(counts.sum())

    result = [{"range": label, "count": int(counts[label])} for label in bounded_labels]
    result.append({"range": PRICE_BUCKET_LABELS[-1], "count": catch_all})
    return result
