from __future__ import annotations

from typing import Any, Dict, List

import altair as alt
import pandas as pd

from core.metrics_bar_chart import PRICE_BUCKET_LABELS

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def price_range_chart(bar_chart: List[Dict[str, Any]]) -> alt.Chart:
    df = pd.DataFrame(bar_chart, columns=["range", "count"])
    return (
        alt.Chart(df, title="Price Range Distribution")
        .mark_bar(color="rgba(75, 192, 192, 0.6)", stroke="rgba(75, 192, 192, 1)", strokeWidth=1)
        .encode(
            x=alt.X("range:N", title="Price Range", sort=PRICE_BUCKET_LABELS),
            y=alt.Y("count:Q", title="Number of Items", axis=alt.Axis(format="d")),
            tooltip=[alt.Tooltip("range:N", title="Range"), alt.Tooltip("count:Q", title="Items")],
        )
    )


def category_chart(pie_chart: List[Dict[str, Any]]) -> alt.Chart:
    df = pd.DataFrame(pie_chart, columns=["_id", "count"]).rename(columns={"_id": "category"})
    return (
        alt.Chart(df, title="Items per Category")
        .mark_arc()
        .encode(
            theta=alt.Theta("count:Q"),
            color=alt.Color("category:N", title="Category"),
            tooltip=["category", alt.Tooltip("count:Q", title="Items")],
        )
    )
