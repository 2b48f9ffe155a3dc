from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10

# Unparseable months become 0, which no calendar month matches.
NO_MONTH_MATCH = 0

_LEADING_INT = re.compile(r"^\s*[+-]?\d+")
_LEADING_FLOAT = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class TransactionFilters:
    month: Optional[int] = None
    search: str = ""
    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.per_page


def parse_leading_int(value: object) -> Optional[int]:
    """Read the leading integer of a query value: "3abc" -> 3, "abc" -> None."""
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(0))


def parse_leading_number(value: object) -> Optional[float]:
    if value is None:
        return None
    match = _LEADING_FLOAT.match(str(value))
    if not match:
        return None
    return float(match.group(0))


def search_price(search: str) -> float:
    """Price compared against in the search predicate; non-numeric text falls back to 0."""
    return parse_leading_number(search) or 0.0


def parse_month(value: object) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    month = parse_leading_int(value)
    return NO_MONTH_MATCH if month is None else month


def _positive_or(value: object, default: int) -> int:
    parsed = parse_leading_int(value)
    if parsed is None or parsed < 1:
        return default
    return parsed


def normalize_filters(raw: dict, *, default_per_page: int = DEFAULT_PER_PAGE) -> TransactionFilters:
    search = raw.get("search")
    search = "" if search is None else str(search)
    return TransactionFilters(
        month=parse_month(raw.get("month")),
        search=search,
        page=_positive_or(raw.get("page"), DEFAULT_PAGE),
        per_page=_positive_or(raw.get("perPage", raw.get("per_page")), default_per_page),
    )
