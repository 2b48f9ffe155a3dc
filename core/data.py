from __future__ import annotations

import logging
import os
import tempfile
import threading
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd
import requests

from core import config
from core.filters import search_price


logger = logging.getLogger(__name__)

RECORD_COLUMNS = ["id", "title", "description", "price", "category", "image", "sold", "dateOfSale"]
TEXT_COLUMNS = ["title", "description", "category", "image"]

_TRUE_TOKENS = {"true", "1", "yes", "y", "t"}


class StoreUnavailableError(RuntimeError):
    """The record source or the local snapshot could not be read or written."""


def drop_duplicate_columns(df: pd.DataFrame) -> pd.DataFrame:
    return df.loc[:, ~df.columns.duplicated()]


def numericize(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


def coerce_text(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            series = df[col]
            df[col] = series.where(series.notna(), "").astype(str)
    return df


def as_bool(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return not pd.isna(value) and value != 0
    return str(value).strip().lower() in _TRUE_TOKENS


def normalize_records(records: Union[Iterable[Dict[str, Any]], pd.DataFrame]) -> pd.DataFrame:
    """Coerce raw source rows into the fixed transaction record frame."""
    if isinstance(records, pd.DataFrame):
        df = records.copy()
    else:
        df = pd.DataFrame.from_records(list(records))
    df = drop_duplicate_columns(df).reindex(columns=RECORD_COLUMNS)
    df = numericize(df, ["id", "price"])
    df["id"] = df["id"].astype(float).round().astype("Int64")
    df["price"] = df["price"].astype(float)
    df = coerce_text(df, TEXT_COLUMNS)
    df["sold"] = df["sold"].map(as_bool).astype(bool)
    df["dateOfSale"] = pd.to_datetime(df["dateOfSale"], errors="coerce", utc=True, format="ISO8601")
    return df.reset_index(drop=True)


def frame_to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Plain-Python rows; dateOfSale as ISO-8601 text."""
    out: List[Dict[str, Any]] = []
    for row in df[RECORD_COLUMNS].itertuples(index=False):
        sale_date = row.dateOfSale
        out.append(
            {
                "id": None if pd.isna(row.id) else int(row.id),
                "title": row.title,
                "description": row.description,
                "price": None if pd.isna(row.price) else float(row.price),
                "category": row.category,
                "image": row.image,
                "sold": bool(row.sold),
                "dateOfSale": None if pd.isna(sale_date) else sale_date.isoformat(),
            }
        )
    return out


# ---------------- Filtering ----------------
def month_mask(df: pd.DataFrame, month: Optional[int]) -> pd.Series:
    """Calendar-month-of-year match across every year; no month matches nothing."""
    if month is None or df.empty:
        return pd.Series(False, index=df.index)
    return (df["dateOfSale"].dt.month == month).fillna(False).astype(bool)


def search_mask(df: pd.DataFrame, search: str) -> pd.Series:
    if not search:
        return pd.Series(True, index=df.index)
    title_hit = df["title"].str.contains(search, case=False, regex=False, na=False)
    description_hit = df["description"].str.contains(search, case=False, regex=False, na=False)
    price_hit = df["price"] == search_price(search)
    return (title_hit | description_hit | price_hit).astype(bool)


def select_month(df: pd.DataFrame, month: Optional[int]) -> pd.DataFrame:
    return df[month_mask(df, month)]


# ---------------- Source + snapshot IO ----------------
def fetch_source_records(url: str, *, timeout: float) -> List[Dict[str, Any]]:
    try:
        r = requests.get(url, timeout=timeout)
        r.raise_for_status()
        data = r.json()
    except (requests.RequestException, ValueError) as exc:
        raise StoreUnavailableError(f"could not fetch transactions from {url}: {exc}") from exc
    if not isinstance(data, list):
        raise StoreUnavailableError(f"expected a JSON array from {url}, got {type(data).__name__}")
    return data


def write_snapshot(df: pd.DataFrame, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    os.close(fd)
    try:
        df.to_json(tmp_name, orient="records", date_format="iso")
        os.replace(tmp_name, path)
    except (OSError, ValueError) as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise StoreUnavailableError(f"could not write snapshot {path}: {exc}") from exc


def read_snapshot(path: Path) -> pd.DataFrame:
    try:
        raw = pd.read_json(path, orient="records", dtype=False, convert_dates=False)
    except (OSError, ValueError) as exc:
        raise StoreUnavailableError(f"could not read snapshot {path}: {exc}") from exc
    return normalize_records(raw)


# ---------------- Record store ----------------
class RecordStore:
    """Owns the transaction snapshot; reloads swap in a complete new frame."""

    def __init__(self, *, snapshot_path: Optional[Path] = None) -> None:
        self._lock = threading.Lock()
        self._frame = normalize_records([])
        self._snapshot_path = snapshot_path

    def snapshot(self) -> pd.DataFrame:
        return self._frame

    def __len__(self) -> int:
        return len(self._frame)

    def replace(self, records: Union[Iterable[Dict[str, Any]], pd.DataFrame]) -> int:
        frame = normalize_records(records)
        with self._lock:
            self._swap(frame)
        return len(frame)

    def initialize_from_source(self, url: Optional[str] = None, *, timeout: Optional[float] = None) -> int:
        url = url or config.source_url()
        timeout = config.fetch_timeout() if timeout is None else timeout
        with self._lock:
            frame = normalize_records(fetch_source_records(url, timeout=timeout))
            self._swap(frame)
        logger.info("transactions reloaded from %s: %d records", url, len(frame))
        return len(frame)

    def load_snapshot(self) -> int:
        if self._snapshot_path is None or not self._snapshot_path.exists():
            return 0
        frame = read_snapshot(self._snapshot_path)
        with self._lock:
            self._frame = frame
        logger.info("transactions restored from %s: %d records", self._snapshot_path, len(frame))
        return len(frame)

    def _swap(self, frame: pd.DataFrame) -> None:
        if self._snapshot_path is not None:
            write_snapshot(frame, self._snapshot_path)
        self._frame = frame


@lru_cache(maxsize=1)
def get_store() -> RecordStore:
    store = RecordStore(snapshot_path=config.snapshot_path())
    try:
        store.load_snapshot()
    except StoreUnavailableError:
        logger.exception("snapshot restore failed; starting with an empty store")
    return store
