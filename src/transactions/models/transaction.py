# path: src/transactions/models/transaction.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from src.core.models.base import Base
from src.core.models.user import User
from src.transactions.models.enums import TransactionStatus
from src.transactions.models.transaction_item import TransactionItem


class Transaction(Base):
    """
    Таблица transactions - “шапка” сдачи вторсырья.

    Инварианты:
    - total_amount = Σ items.subtotal, total_weight = Σ items.weight (округление до 0.01);
    - строки (items) создаются вместе с шапкой одним flush и больше не меняются;
    - status меняется только админом по графу из services/state_machine.py.
    """

    __tablename__ = "transactions"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=TransactionStatus.PENDING.value,
        server_default=TransactionStatus.PENDING.value,
        index=True,
    )

    total_amount: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)
    total_weight: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)

    # комментарий админа при смене статуса (необязательный)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    user: Mapped[User] = relationship(User, lazy="joined")
    items: Mapped[list[TransactionItem]] = relationship(
        TransactionItem,
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=TransactionItem.id,
    )

    __table_args__ = (
        Index("ix_transactions_user_created_at", "user_id", "created_at"),
        CheckConstraint(
            "status IN ('PENDING','APPROVED','REJECTED','COMPLETED')",
            name="chk_transactions_status",
        ),
    )
