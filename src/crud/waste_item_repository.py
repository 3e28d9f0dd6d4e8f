# path: src/crud/waste_item_repository.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Protocol, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.catalog.models.category import Category
from src.catalog.models.waste_item import WasteItem
from src.core.exceptions import NotFoundError
from src.transactions.models.transaction_item import TransactionItem


@dataclass(frozen=True)
class ItemUsage:
    """Сколько раз позиция попадала в транзакции и на какую сумму/вес."""
    line_count: int = 0
    total_weight: Decimal = Decimal(0)
    total_revenue: Decimal = Decimal(0)


class IWasteItemRepository(Protocol):
    """
    Интерфейс репозитория waste_items (DI-контракт).

    Зачем:
    - единый паттерн: Protocol + реализация;
    - удобно мокать в тестах (tests/conftest.py);
    - удобно указывать тип в Depends.
    """

    async def get_by_id(self, session: AsyncSession, *, item_id: int) -> Optional[WasteItem]: ...

    async def get_by_ids(self, session: AsyncSession, item_ids: Sequence[int]) -> Dict[int, WasteItem]: ...

    async def find_duplicate(
        self,
        session: AsyncSession,
        *,
        name: str,
        category_id: int,
        exclude_id: Optional[int] = None,
    ) -> Optional[WasteItem]: ...

    async def list_items(
        self,
        session: AsyncSession,
        *,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
        is_active: Optional[bool] = True,
    ) -> list[WasteItem]: ...

    async def create(self, session: AsyncSession, **fields: Any) -> WasteItem: ...
    async def update_fields(self, session: AsyncSession, *, item_id: int, **fields: Any) -> None: ...
    async def deactivate(self, session: AsyncSession, *, item_id: int) -> None: ...
    async def delete(self, session: AsyncSession, *, item_id: int) -> None: ...

    async def usage(self, session: AsyncSession, *, item_id: int) -> ItemUsage: ...
    async def count_active(self, session: AsyncSession) -> int: ...


class WasteItemRepository(IWasteItemRepository):
    """
    Репозиторий для таблицы waste_items.

    Правило:
    - SQL/DB вызовы живут только здесь (src/crud/).
    - commit делает сервис: тут только flush.
    """

    async def get_by_id(self, session: AsyncSession, *, item_id: int) -> Optional[WasteItem]:
        res = await session.execute(
            select(WasteItem)
            .where(WasteItem.id == int(item_id))
            .execution_options(populate_existing=True)
        )
        return res.scalar_one_or_none()

    async def get_by_ids(self, session: AsyncSession, item_ids: Sequence[int]) -> Dict[int, WasteItem]:
        """
        Все найденные позиции (и активные, и нет) одним SELECT ... IN.
        Активность проверяет валидатор - так он может назвать проблемные id.
        """
        ids = [int(i) for i in item_ids]
        if not ids:
            return {}
        res = await session.execute(select(WasteItem).where(WasteItem.id.in_(ids)))
        return {int(it.id): it for it in res.scalars().unique()}

    async def find_duplicate(
        self,
        session: AsyncSession,
        *,
        name: str,
        category_id: int,
        exclude_id: Optional[int] = None,
    ) -> Optional[WasteItem]:
        stmt = select(WasteItem).where(
            WasteItem.name == name,
            WasteItem.category_id == int(category_id),
        )
        if exclude_id is not None:
            stmt = stmt.where(WasteItem.id != int(exclude_id))
        res = await session.execute(stmt.limit(1))
        return res.scalars().first()

    async def list_items(
        self,
        session: AsyncSession,
        *,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
        is_active: Optional[bool] = True,
    ) -> list[WasteItem]:
        """
        Фильтры: категория, подстрока в имени (ILIKE), активность (None = все).
        Сортировка: имя категории, затем имя позиции.
        """
        stmt = select(WasteItem).join(Category, WasteItem.category_id == Category.id)

        if category_id is not None:
            stmt = stmt.where(WasteItem.category_id == int(category_id))
        if search:
            stmt = stmt.where(WasteItem.name.ilike(f"%{search}%"))
        if is_active is not None:
            stmt = stmt.where(WasteItem.is_active.is_(bool(is_active)))

        stmt = stmt.order_by(Category.name.asc(), WasteItem.name.asc())
        res = await session.execute(stmt)
        return list(res.scalars().unique())

    async def create(self, session: AsyncSession, **fields: Any) -> WasteItem:
        item = WasteItem(**fields)
        session.add(item)
        await session.flush()
        created = await self.get_by_id(session, item_id=int(item.id))
        if created is None:
            raise NotFoundError("Waste item", item.id)
        return created

    async def update_fields(self, session: AsyncSession, *, item_id: int, **fields: Any) -> None:
        if not fields:
            return
        await session.execute(
            update(WasteItem)
            .where(WasteItem.id == int(item_id))
            .values(**fields, updated_at=func.now())
        )

    async def deactivate(self, session: AsyncSession, *, item_id: int) -> None:
        await self.update_fields(session, item_id=item_id, is_active=False)

    async def delete(self, session: AsyncSession, *, item_id: int) -> None:
        await session.execute(delete(WasteItem).where(WasteItem.id == int(item_id)))

    async def usage(self, session: AsyncSession, *, item_id: int) -> ItemUsage:
        stmt = select(
            func.count(TransactionItem.id),
            func.coalesce(func.sum(TransactionItem.weight), 0),
            func.coalesce(func.sum(TransactionItem.subtotal), 0),
        ).where(TransactionItem.waste_item_id == int(item_id))
        count, weight, revenue = (await session.execute(stmt)).one()
        return ItemUsage(
            line_count=int(count or 0),
            total_weight=Decimal(weight or 0),
            total_revenue=Decimal(revenue or 0),
        )

    async def count_active(self, session: AsyncSession) -> int:
        res = await session.execute(
            select(func.count()).select_from(WasteItem).where(WasteItem.is_active.is_(True))
        )
        return int(res.scalar_one())
