import calendar
import logging

import pandas as pd
import streamlit as st

from core.charts import category_chart, price_range_chart
from core.data import StoreUnavailableError, get_store
from core.filters import DEFAULT_PER_PAGE, TransactionFilters
from core.metrics_bar_chart import compute_bar_chart
from core.metrics_pie_chart import compute_pie_chart
from core.metrics_statistics import compute_statistics
from core.metrics_transactions import compute_transactions

logger = logging.getLogger(__name__)

MONTHS = list(calendar.month_name)[1:]
DEFAULT_MONTH = 3


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.1rem;color: #111827;margin-bottom: 8px;}
        .stat-label {font-weight: 600;color: #374151;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


def format_currency_2(value: object) -> str:
    if value is None or pd.isna(value):
        return "N/A"
    return f"${float(value):,.2f}"


def render_statistics(statistics: dict):
    st.markdown("<div class='card'><div class='card-title'>Transaction Statistics</div>", unsafe_allow_html=True)
    c1, c2, c3 = st.columns(3)
    c1.metric("Total Sale Amount", format_currency_2(statistics["totalSaleAmount"]))
    c2.metric("Total Sold Items", statistics["totalSoldItems"])
    c3.metric("Total Not Sold Items", statistics["totalNotSoldItems"])
    st.markdown("</div>", unsafe_allow_html=True)


def transactions_table(rows: list) -> pd.DataFrame:
    df = pd.DataFrame(rows, columns=["id", "title", "description", "price", "category", "sold", "image"])
    df["price"] = df["price"].apply(format_currency_2)
    df["sold"] = df["sold"].map({True: "Yes", False: "No"})
    return df.rename(
        columns={
            "id": "ID",
            "title": "Title",
            "description": "Description",
            "price": "Price",
            "category": "Category",
            "sold": "Sold",
            "image": "Image",
        }
    )


def _reset_page():
    st.session_state["page"] = 1


# ---------- UI setup ----------
st.set_page_config(page_title="Transaction Dashboard", layout="wide")
inject_base_styles()
st.title("Transaction Dashboard")

store = get_store()

with st.sidebar:
    st.markdown("### Data")
    st.caption(f"{len(store)} transactions loaded")
    if st.button("Reload from source"):
        try:
            count = store.initialize_from_source()
            st.success(f"Database initialized successfully ({count} records)")
            _reset_page()
        except StoreUnavailableError:
            logger.exception("dashboard reload failed")
            st.error("Failed to initialize database")

if "page" not in st.session_state:
    st.session_state["page"] = 1

c_search, c_month = st.columns([3, 1])
with c_search:
    search = st.text_input("Search transaction", "", on_change=_reset_page)
with c_month:
    month_name = st.selectbox("Month", MONTHS, index=DEFAULT_MONTH - 1, on_change=_reset_page)
month = MONTHS.index(month_name) + 1

records = store.snapshot()
month_filters = TransactionFilters(month=month)

render_statistics(compute_statistics(month_filters, records))

listing = compute_transactions(
    TransactionFilters(month=month, search=search, page=st.session_state["page"], per_page=DEFAULT_PER_PAGE),
    records,
)
st.dataframe(
    transactions_table(listing["transactions"]),
    hide_index=True,
    use_container_width=True,
    column_config={"Image": st.column_config.ImageColumn("Image")},
)

p1, p2, p3, p4 = st.columns([3, 1, 1, 3])
p1.write(f"Page No: {listing['page']}")
if p2.button("Previous", disabled=listing["page"] <= 1):
    st.session_state["page"] = max(1, listing["page"] - 1)
    st.rerun()
if p3.button("Next", disabled=listing["page"] >= listing["totalPages"]):
    st.session_state["page"] = listing["page"] + 1
    st.rerun()
p4.write(f"Per Page: {listing['perPage']}")

st.subheader("Price Range Distribution")
st.altair_chart(price_range_chart(compute_bar_chart(month_filters, records)), use_container_width=True)

pie = compute_pie_chart(month_filters, records)
if pie:
    st.altair_chart(category_chart(pie), use_container_width=True)
