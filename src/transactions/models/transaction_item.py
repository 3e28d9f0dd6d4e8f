# path: src/transactions/models/transaction_item.py
from __future__ import annotations

from decimal import Decimal

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.catalog.models.waste_item import WasteItem
from src.core.models.base import Base


class TransactionItem(Base):
    """
    Строка транзакции: какая позиция, сколько весит, по какой цене продана.

    price - цена на момент сдачи (сверена с каталогом при создании),
    поэтому последующая смена цены в каталоге историю не трогает.
    """

    __tablename__ = "transaction_items"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)

    transaction_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("transactions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # RESTRICT: позицию с историей можно только выключить
    waste_item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("waste_items.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    weight: Mapped[Decimal] = mapped_column(Numeric(12, 3), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(20, 5), nullable=False)

    waste_item: Mapped[WasteItem] = relationship(WasteItem, lazy="joined")

    __table_args__ = (
        CheckConstraint("weight > 0", name="chk_transaction_items_weight"),
        CheckConstraint("price >= 0", name="chk_transaction_items_price"),
    )
