# path: src/catalog/models/category.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.core.models.base import Base


class Category(Base):
    """
    Категория вторсырья (Logam, Plastik, Kertas, ...).
    Создаётся сидом или админом; удаления нет.
    """

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (UniqueConstraint("name", name="uq_categories_name"),)
