# path: src/crud/category_repository.py
from __future__ import annotations

from typing import Optional, Protocol, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.catalog.models.category import Category


class ICategoryRepository(Protocol):
    """
    DI-контракт для CategoryRepository.
    Удаления категорий нет.
    """

    async def get_by_id(self, session: AsyncSession, *, category_id: int) -> Optional[Category]: ...
    async def get_by_name(self, session: AsyncSession, *, name: str) -> Optional[Category]: ...
    async def list_categories(self, session: AsyncSession) -> Sequence[Category]: ...

    async def create(
        self,
        session: AsyncSession,
        *,
        name: str,
        description: Optional[str] = None,
    ) -> Category: ...


class CategoryRepository(ICategoryRepository):
    async def get_by_id(self, session: AsyncSession, *, category_id: int) -> Optional[Category]:
        res = await session.execute(select(Category).where(Category.id == int(category_id)))
        return res.scalar_one_or_none()

    async def get_by_name(self, session: AsyncSession, *, name: str) -> Optional[Category]:
        """Сравнение без учёта регистра: "plastik" и "Plastik" - одна категория."""
        res = await session.execute(
            select(Category).where(func.lower(Category.name) == name.strip().lower())
        )
        return res.scalar_one_or_none()

    async def list_categories(self, session: AsyncSession) -> Sequence[Category]:
        res = await session.execute(select(Category).order_by(Category.name.asc()))
        return list(res.scalars())

    async def create(
        self,
        session: AsyncSession,
        *,
        name: str,
        description: Optional[str] = None,
    ) -> Category:
        category = Category(name=name, description=description)
        session.add(category)
        await session.flush()
        await session.refresh(category)
        return category
