# path: src/crud/transaction_repository.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.app_logging import get_logger
from src.core.exceptions import NotFoundError
from src.transactions.models.enums import TransactionStatus
from src.transactions.models.transaction import Transaction
from src.transactions.models.transaction_item import TransactionItem
from src.transactions.services.validator import ValidatedLine


log = get_logger("repo.transaction")


@dataclass(frozen=True)
class StatusTotals:
    status: str
    count: int
    total_amount: Decimal
    total_weight: Decimal


class ITransactionRepository(Protocol):
    async def create_with_items(
        self,
        session: AsyncSession,
        *,
        user_id: int,
        total_amount: Decimal,
        total_weight: Decimal,
        lines: Sequence[ValidatedLine],
    ) -> Transaction: ...

    async def get_by_id(
        self,
        session: AsyncSession,
        *,
        transaction_id: int,
        owner_id: Optional[int] = None,
    ) -> Optional[Transaction]: ...

    async def list_transactions(
        self,
        session: AsyncSession,
        *,
        owner_id: Optional[int] = None,
    ) -> list[Transaction]: ...

    async def update_status(
        self,
        session: AsyncSession,
        *,
        transaction_id: int,
        expected_status: str,
        new_status: str,
        notes: Optional[str] = None,
    ) -> bool: ...

    async def totals_by_status(
        self,
        session: AsyncSession,
        *,
        owner_id: Optional[int] = None,
    ) -> list[StatusTotals]: ...


class TransactionRepository(ITransactionRepository):
    """
    Репозиторий transactions + transaction_items.

    Важно:
    - шапка и строки пишутся одним flush: либо всё, либо ничего (commit - в сервисе);
    - смена статуса - условный UPDATE ... WHERE status = :expected,
      чтобы два админа не перетёрли друг друга по устаревшему чтению.
    """

    @staticmethod
    def _base_select():
        return (
            select(Transaction)
            .options(selectinload(Transaction.items))
            .execution_options(populate_existing=True)
        )

    async def create_with_items(
        self,
        session: AsyncSession,
        *,
        user_id: int,
        total_amount: Decimal,
        total_weight: Decimal,
        lines: Sequence[ValidatedLine],
    ) -> Transaction:
        tx = Transaction(
            user_id=int(user_id),
            status=TransactionStatus.PENDING.value,
            total_amount=total_amount,
            total_weight=total_weight,
            items=[
                TransactionItem(
                    waste_item_id=ln.waste_item_id,
                    weight=ln.weight,
                    price=ln.price,
                    subtotal=ln.subtotal,
                )
                for ln in lines
            ],
        )
        session.add(tx)
        await session.flush()

        log.info({"event": "transaction_insert", "transaction_id": tx.id, "user_id": user_id, "lines": len(lines)})

        created = await self.get_by_id(session, transaction_id=int(tx.id))
        if created is None:
            raise NotFoundError("Transaction", tx.id)
        return created

    async def get_by_id(
        self,
        session: AsyncSession,
        *,
        transaction_id: int,
        owner_id: Optional[int] = None,
    ) -> Optional[Transaction]:
        stmt = self._base_select().where(Transaction.id == int(transaction_id))
        if owner_id is not None:
            stmt = stmt.where(Transaction.user_id == int(owner_id))
        res = await session.execute(stmt)
        return res.scalars().unique().one_or_none()

    async def list_transactions(
        self,
        session: AsyncSession,
        *,
        owner_id: Optional[int] = None,
    ) -> list[Transaction]:
        stmt = self._base_select()
        if owner_id is not None:
            stmt = stmt.where(Transaction.user_id == int(owner_id))
        stmt = stmt.order_by(Transaction.created_at.desc(), Transaction.id.desc())
        res = await session.execute(stmt)
        return list(res.scalars().unique())

    async def update_status(
        self,
        session: AsyncSession,
        *,
        transaction_id: int,
        expected_status: str,
        new_status: str,
        notes: Optional[str] = None,
    ) -> bool:
        values = {"status": new_status, "updated_at": func.now()}
        if notes is not None:
            values["notes"] = notes

        res = await session.execute(
            update(Transaction)
            .where(
                Transaction.id == int(transaction_id),
                Transaction.status == expected_status,
            )
            .values(**values)
        )
        return bool(res.rowcount)

    async def totals_by_status(
        self,
        session: AsyncSession,
        *,
        owner_id: Optional[int] = None,
    ) -> list[StatusTotals]:
        stmt = select(
            Transaction.status,
            func.count(Transaction.id),
            func.coalesce(func.sum(Transaction.total_amount), 0),
            func.coalesce(func.sum(Transaction.total_weight), 0),
        ).group_by(Transaction.status)
        if owner_id is not None:
            stmt = stmt.where(Transaction.user_id == int(owner_id))

        rows = (await session.execute(stmt)).all()
        return [
            StatusTotals(
                status=str(status),
                count=int(count or 0),
                total_amount=Decimal(amount or 0),
                total_weight=Decimal(weight or 0),
            )
            for status, count, amount, weight in rows
        ]
