"""Configuration helpers for environment variables."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from core.filters import DEFAULT_PER_PAGE


logger = logging.getLogger(__name__)

DEFAULT_SOURCE_URL = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"
DEFAULT_FETCH_TIMEOUT = 10.0
DEV_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:8501"]


def _should_load_dotenv() -> bool:
    app_env = os.getenv("APP_ENV", "dev").strip().lower()
    return app_env in {"dev", "local"}


if _should_load_dotenv():
    load_dotenv()


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(name, default)


def app_env() -> str:
    return (get_env("APP_ENV", "dev") or "dev").strip() or "dev"


def source_url() -> str:
    return (get_env("TRANSACTIONS_SOURCE_URL", "") or "").strip() or DEFAULT_SOURCE_URL


def snapshot_path() -> Optional[Path]:
    """Local JSON file the record snapshot is persisted to, if configured."""
    raw = (get_env("TRANSACTIONS_SNAPSHOT_PATH", "") or "").strip()
    return Path(raw) if raw else None


def fetch_timeout() -> float:
    raw = (get_env("TRANSACTIONS_FETCH_TIMEOUT", "") or "").strip()
    if not raw:
        return DEFAULT_FETCH_TIMEOUT
    try:
        return max(0.1, float(raw))
    except ValueError:
        logger.warning("invalid TRANSACTIONS_FETCH_TIMEOUT=%r; using %s", raw, DEFAULT_FETCH_TIMEOUT)
        return DEFAULT_FETCH_TIMEOUT


def default_per_page() -> int:
    raw = (get_env("DEFAULT_PER_PAGE", "") or "").strip()
    try:
        value = int(raw) if raw else DEFAULT_PER_PAGE
    except ValueError:
        return DEFAULT_PER_PAGE
    return value if value >= 1 else DEFAULT_PER_PAGE


def cors_allow_origins() -> List[str]:
    raw_origins = get_env("CORS_ALLOW_ORIGINS", "") or ""
    parsed = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
    if parsed:
        return parsed
    if app_env().lower() in {"dev", "local", "test"}:
        return list(DEV_CORS_ORIGINS)
    logger.warning("cors_allow_origins_empty app_env=%s; define CORS_ALLOW_ORIGINS", app_env())
    return []
