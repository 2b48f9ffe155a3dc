from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TransactionQueryModel(BaseModel):
    """Raw query values; parsed leniently by core.filters.normalize_filters."""

    month: Optional[str] = None
    search: Optional[str] = None
    page: Optional[str] = None
    perPage: Optional[str] = None


class TransactionModel(BaseModel):
    id: Optional[int] = None
    title: str = ""
    description: str = ""
    price: Optional[float] = None
    category: str = ""
    image: str = ""
    sold: bool = False
    dateOfSale: Optional[str] = None


class TransactionsPageModel(BaseModel):
    transactions: List[TransactionModel] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    perPage: int = 10
    totalPages: int = 0


class StatisticsModel(BaseModel):
    totalSaleAmount: float = 0
    totalSoldItems: int = 0
    totalNotSoldItems: int = 0


class PriceRangeModel(BaseModel):
    range: str
    count: int


class CategoryCountModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category: str = Field(alias="_id")
    count: int


class CombinedDataModel(BaseModel):
    transactions: TransactionsPageModel
    statistics: StatisticsModel
    barChart: List[PriceRangeModel]
    pieChart: List[CategoryCountModel]


class MessageModel(BaseModel):
    message: str


class ErrorModel(BaseModel):
    error: str
