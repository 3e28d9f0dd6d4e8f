# path: src/catalog/models/waste_item.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from src.catalog.models.category import Category
from src.core.models.base import Base


class WasteItem(Base):
    """
    Позиция каталога: что принимаем и почём.

    Важно:
    - цену/единицу/категорию/активность меняет только админ;
    - если позиция хоть раз попала в transaction_items - её не удаляем,
      а выключаем (is_active=false), чтобы история транзакций не ломалась.
    """

    __tablename__ = "waste_items"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    unit: Mapped[str] = mapped_column(String(32), nullable=False)

    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true", index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    category: Mapped[Category] = relationship(Category, lazy="joined")

    __table_args__ = (
        # имя уникально в пределах категории
        UniqueConstraint("name", "category_id", name="uq_waste_items_name_category"),
        CheckConstraint("price >= 0", name="chk_waste_items_price"),
    )
