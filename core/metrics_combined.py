from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from core.filters import NO_MONTH_MATCH, TransactionFilters
from core.metrics_bar_chart import compute_bar_chart
from core.metrics_pie_chart import compute_pie_chart
from core.metrics_statistics import compute_statistics
from core.metrics_transactions import compute_transactions


def compute_combined(filters: TransactionFilters, records: pd.DataFrame) -> Dict[str, Any]:
    # Listing part is the first month-only page; a missing month matches nothing here too.
    month = NO_MONTH_MATCH if filters.month is None else filters.month
    month_only = TransactionFilters(month=month, per_page=filters.per_page)
    return {
        "transactions": compute_transactions(month_only, records),
        "statistics": compute_statistics(filters, records),
        "barChart": compute_bar_chart(filters, records),
        "pieChart": compute_pie_chart(filters, records),
    }
