# path: src/catalog/services/catalog_service.py
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Sequence

from src.app_logging import get_logger
from src.catalog.models.category import Category
from src.catalog.models.waste_item import WasteItem
from src.catalog.schemas.catalog import (
    CategoryCreate,
    WasteItemCreate,
    WasteItemStats,
    WasteItemUpdate,
)
from src.core.exceptions import DuplicateError, InvalidFieldError, NotFoundError
from src.core.utils.access import Actor, require_admin
from src.crud.category_repository import CategoryRepository, ICategoryRepository
from src.crud.waste_item_repository import IWasteItemRepository, WasteItemRepository


log = get_logger("catalog.service")


class DeleteOutcome(str, Enum):
    """Результат удаления позиции: выключили (есть история) или удалили совсем."""

    DEACTIVATED = "DEACTIVATED"
    REMOVED = "REMOVED"


def _clean_text(field: str, value: Optional[str]) -> str:
    v = (value or "").strip()
    if not v:
        raise InvalidFieldError(field, f"{field} must not be empty")
    return v


def _clean_price(value: Any) -> Decimal:
    try:
        price = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise InvalidFieldError("price", "price must be a number and must not be negative") from e
    if not price.is_finite() or price < 0:
        raise InvalidFieldError("price", "price must be a number and must not be negative")
    return price


class CatalogService:
    """
    Ведение каталога: категории и позиции вторсырья.

    Важно:
    - все мутации - только ADMIN (require_admin);
    - session приходит из API; commit делаем здесь, после всех проверок;
    - DB-операции - через репозитории.
    """

    def __init__(
        self,
        *,
        category_repo: Optional[ICategoryRepository] = None,
        item_repo: Optional[IWasteItemRepository] = None,
    ) -> None:
        self._category_repo: ICategoryRepository = category_repo or CategoryRepository()
        self._item_repo: IWasteItemRepository = item_repo or WasteItemRepository()

    # --- Категории ---

    async def list_categories(self, session) -> Sequence[Category]:
        return await self._category_repo.list_categories(session)

    async def create_category(self, session, actor: Optional[Actor], data: CategoryCreate) -> Category:
        require_admin(actor)
        name = _clean_text("name", data.name)

        if await self._category_repo.get_by_name(session, name=name):
            raise DuplicateError("Category with this name already exists", {"name": name})

        description = (data.description or "").strip() or None
        category = await self._category_repo.create(session, name=name, description=description)
        await session.commit()

        log.info({"event": "category_created", "category_id": category.id, "actor_id": actor.user_id})
        return category

    # --- Позиции: чтение ---

    async def list_items(
        self,
        session,
        *,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
        is_active: Optional[bool] = True,
    ) -> list[WasteItem]:
        search = (search or "").strip() or None
        return await self._item_repo.list_items(
            session,
            category_id=category_id,
            search=search,
            is_active=is_active,
        )

    async def get_item(self, session, item_id: int) -> tuple[WasteItem, WasteItemStats]:
        """Позиция + статистика по строкам транзакций, где она встречалась."""
        item = await self._item_repo.get_by_id(session, item_id=item_id)
        if not item:
            raise NotFoundError("Waste item", item_id)

        usage = await self._item_repo.usage(session, item_id=item_id)
        avg = usage.total_weight / usage.line_count if usage.line_count else Decimal(0)
        stats = WasteItemStats(
            total_weight=float(usage.total_weight),
            total_transactions=usage.line_count,
            total_revenue=float(usage.total_revenue),
            average_weight=float(avg),
        )
        return item, stats

    # --- Позиции: мутации ---

    async def _require_category(self, session, category_id: int) -> Category:
        category = await self._category_repo.get_by_id(session, category_id=category_id)
        if not category:
            raise InvalidFieldError("category_id", "Category not found")
        return category

    async def create_item(self, session, actor: Optional[Actor], data: WasteItemCreate) -> WasteItem:
        require_admin(actor)

        name = _clean_text("name", data.name)
        unit = _clean_text("unit", data.unit)
        await self._require_category(session, data.category_id)

        if await self._item_repo.find_duplicate(session, name=name, category_id=data.category_id):
            raise DuplicateError(
                "Waste item with this name already exists in this category",
                {"name": name, "category_id": data.category_id},
            )

        price = _clean_price(data.price)

        item = await self._item_repo.create(
            session,
            name=name,
            price=price,
            unit=unit,
            category_id=data.category_id,
            is_active=bool(data.is_active),
        )
        await session.commit()

        log.info({"event": "waste_item_created", "item_id": item.id, "actor_id": actor.user_id, "price": price})
        return item

    async def update_item(
        self,
        session,
        actor: Optional[Actor],
        item_id: int,
        data: WasteItemUpdate,
    ) -> WasteItem:
        """
        Частичное обновление. Проверяем только то, что прислали:
        - name: не пустое;
        - пара (name, category_id) без дубля, исключая саму позицию;
        - category_id: категория существует;
        - price: число >= 0;
        - unit: не пустая.
        """
        require_admin(actor)

        existing = await self._item_repo.get_by_id(session, item_id=item_id)
        if not existing:
            raise NotFoundError("Waste item", item_id)

        patch = data.model_dump(exclude_unset=True)
        fields: dict[str, Any] = {}

        if "category_id" in patch and patch["category_id"] is not None:
            await self._require_category(session, patch["category_id"])
            fields["category_id"] = int(patch["category_id"])

        if "name" in patch:
            fields["name"] = _clean_text("name", patch["name"])

        # пара (name, category_id) проверяется, если поменялась любая её половина
        if "name" in fields or "category_id" in fields:
            name = fields.get("name", existing.name)
            category_id = fields.get("category_id", existing.category_id)
            duplicate = await self._item_repo.find_duplicate(
                session,
                name=name,
                category_id=category_id,
                exclude_id=item_id,
            )
            if duplicate:
                raise DuplicateError(
                    "Waste item with this name already exists in this category",
                    {"name": name, "category_id": category_id},
                )

        if "price" in patch:
            fields["price"] = _clean_price(patch["price"])

        if "unit" in patch:
            fields["unit"] = _clean_text("unit", patch["unit"])

        if "is_active" in patch and patch["is_active"] is not None:
            fields["is_active"] = bool(patch["is_active"])

        if fields:
            await self._item_repo.update_fields(session, item_id=item_id, **fields)
            await session.commit()
            log.info({"event": "waste_item_updated", "item_id": item_id, "actor_id": actor.user_id, **fields})

        updated = await self._item_repo.get_by_id(session, item_id=item_id)
        if not updated:
            raise NotFoundError("Waste item", item_id)
        return updated

    async def delete_item(self, session, actor: Optional[Actor], item_id: int) -> DeleteOutcome:
        """
        Есть строки транзакций -> только выключаем (история ссылается на позицию).
        Нет -> удаляем строку.
        """
        require_admin(actor)

        existing = await self._item_repo.get_by_id(session, item_id=item_id)
        if not existing:
            raise NotFoundError("Waste item", item_id)

        usage = await self._item_repo.usage(session, item_id=item_id)
        if usage.line_count > 0:
            await self._item_repo.deactivate(session, item_id=item_id)
            outcome = DeleteOutcome.DEACTIVATED
        else:
            await self._item_repo.delete(session, item_id=item_id)
            outcome = DeleteOutcome.REMOVED
        await session.commit()

        log.info(
            {
                "event": "waste_item_deleted",
                "item_id": item_id,
                "actor_id": actor.user_id,
                "outcome": outcome.value,
                "references": usage.line_count,
            }
        )
        return outcome
