# path: src/transactions/schemas/transaction.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from src.catalog.schemas.catalog import WasteItemOut
from src.core.schemas.common import ORMBaseSchema
from src.core.schemas.user import UserBrief
from src.transactions.models.enums import TransactionStatus


class TransactionLineIn(BaseModel):
    """
    Строка заявки от клиента.

    Типы проверяет pydantic, а наличие полей и диапазоны - валидатор
    (services/validator.py): так ошибки приходят с индексом строки.
    """
    waste_item_id: Optional[int] = Field(default=None, examples=[6])
    weight: Optional[Decimal] = Field(default=None, examples=[3])
    price: Optional[Decimal] = Field(default=None, examples=[2600])


class TransactionCreate(BaseModel):
    items: List[TransactionLineIn] = Field(default_factory=list)


class TransactionTransition(BaseModel):
    status: TransactionStatus = Field(..., examples=[TransactionStatus.APPROVED])
    notes: Optional[str] = Field(default=None, max_length=2000)


class TransactionItemOut(ORMBaseSchema):
    id: int
    waste_item_id: int
    weight: float
    price: float
    subtotal: float
    waste_item: Optional[WasteItemOut] = None


class TransactionOut(ORMBaseSchema):
    id: int
    user_id: int
    status: TransactionStatus
    total_amount: float
    total_weight: float
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: Optional[UserBrief] = None
    items: List[TransactionItemOut] = Field(default_factory=list)


class StatusBucket(BaseModel):
    count: int = 0
    total_amount: float = 0.0
    total_weight: float = 0.0


class TransactionSummary(BaseModel):
    """
    Цифры для дашбордов (админ - по всем, пользователь - по своим).
    earned_amount - сумма COMPLETED (“баланс” пользователя).
    """
    total_transactions: int
    total_amount: float
    total_weight: float
    earned_amount: float
    active_waste_items: int
    by_status: dict[str, StatusBucket]
