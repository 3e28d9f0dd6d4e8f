# path: src/catalog/schemas/catalog.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from src.core.schemas.common import ORMBaseSchema


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=128, examples=["Plastik"])
    description: Optional[str] = Field(default=None, examples=["Barang-barang dari plastik"])


class CategoryOut(ORMBaseSchema):
    id: int
    name: str
    description: Optional[str] = None


class WasteItemCreate(BaseModel):
    """
    Новая позиция каталога.
    Непустые name/unit, существование категории и price >= 0 проверяет CatalogService.
    """
    name: str = Field(..., max_length=255, examples=["Botol plastik kecil atau besar"])
    price: Decimal = Field(..., examples=[2600])
    unit: str = Field(..., max_length=32, examples=["Kg"])
    category_id: int
    is_active: bool = True


class WasteItemUpdate(BaseModel):
    """
    Частичное обновление: меняются только переданные поля (exclude_unset).
    """
    name: Optional[str] = Field(default=None, max_length=255)
    price: Optional[Decimal] = None
    unit: Optional[str] = Field(default=None, max_length=32)
    category_id: Optional[int] = None
    is_active: Optional[bool] = None


class WasteItemOut(ORMBaseSchema):
    id: int
    name: str
    price: float
    unit: str
    category_id: int
    is_active: bool
    category: Optional[CategoryOut] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class WasteItemStats(BaseModel):
    total_weight: float = 0.0
    total_transactions: int = 0
    total_revenue: float = 0.0
    average_weight: float = 0.0


class WasteItemDetail(WasteItemOut):
    statistics: WasteItemStats


class WasteItemList(BaseModel):
    success: bool = True
    data: list[WasteItemOut]
    count: int


class DeleteResult(BaseModel):
    success: bool = True
    outcome: str = Field(..., examples=["DEACTIVATED", "REMOVED"])
    message: str
