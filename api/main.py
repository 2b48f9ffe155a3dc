from __future__ import annotations

import logging
import math
from typing import List, Optional

import numpy as np
import pandas as pd
from fastapi import FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.schemas import (
    CategoryCountModel,
    CombinedDataModel,
    ErrorModel,
    MessageModel,
    PriceRangeModel,
    StatisticsModel,
    TransactionQueryModel,
    TransactionsPageModel,
)
from core import config
from core.data import get_store
from core.filters import TransactionFilters, normalize_filters
from core.metrics_bar_chart import compute_bar_chart
from core.metrics_combined import compute_combined
from core.metrics_pie_chart import compute_pie_chart
from core.metrics_statistics import compute_statistics
from core.metrics_transactions import compute_transactions


app = FastAPI(title="Transaction Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_RESPONSES = {500: {"model": ErrorModel}}


def _filters_from_model(model: TransactionQueryModel) -> TransactionFilters:
    raw = model.model_dump(exclude_none=True)
    return normalize_filters(raw, default_per_page=config.default_per_page())


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                type(pd.NaT): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


@app.get("/api/initialize", response_model=MessageModel, responses=ERROR_RESPONSES)
def initialize():
    try:
        get_store().initialize_from_source()
        return _json({"message": "Database initialized successfully"})
    except Exception:
        logger.exception("initialize failed")
        return _error("Failed to initialize database")


@app.get("/api/transactions", response_model=TransactionsPageModel, responses=ERROR_RESPONSES)
def transactions(
    month: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    page: Optional[str] = Query(default=None),
    per_page: Optional[str] = Query(default=None, alias="perPage"),
):
    try:
        f = _filters_from_model(TransactionQueryModel(month=month, search=search, page=page, perPage=per_page))
        return _json(compute_transactions(f, get_store().snapshot()))
    except Exception:
        logger.exception("transactions failed")
        return _error("Failed to fetch transactions")


@app.get("/api/statistics", response_model=StatisticsModel, responses=ERROR_RESPONSES)
def statistics(month: Optional[str] = Query(default=None)):
    try:
        f = _filters_from_model(TransactionQueryModel(month=month))
        return _json(compute_statistics(f, get_store().snapshot()))
    except Exception:
        logger.exception("statistics failed")
        return _error("Failed to fetch statistics")


@app.get("/api/bar-chart", response_model=List[PriceRangeModel], responses=ERROR_RESPONSES)
def bar_chart(month: Optional[str] = Query(default=None)):
    try:
        f = _filters_from_model(TransactionQueryModel(month=month))
        return _json(compute_bar_chart(f, get_store().snapshot()))
    except Exception:
        logger.exception("bar_chart failed")
        return _error("Failed to fetch bar chart data")


@app.get("/api/pie-chart", response_model=List[CategoryCountModel], responses=ERROR_RESPONSES)
def pie_chart(month: Optional[str] = Query(default=None)):
    try:
        f = _filters_from_model(TransactionQueryModel(month=month))
        return _json(compute_pie_chart(f, get_store().snapshot()))
    except Exception:
        logger.exception("pie_chart failed")
        return _error("Failed to fetch pie chart data")


@app.get("/api/combined-data", response_model=CombinedDataModel, responses=ERROR_RESPONSES)
def combined_data(month: Optional[str] = Query(default=None)):
    try:
        f = _filters_from_model(TransactionQueryModel(month=month))
        return _json(compute_combined(f, get_store().snapshot()))
    except Exception:
        logger.exception("combined_data failed")
        return _error("Failed to fetch combined data")
