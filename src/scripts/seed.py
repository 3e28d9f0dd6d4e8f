# path: src/scripts/seed.py
"""
Начальные данные банка: категории, позиции каталога, демо-аккаунты.

Повторный запуск безопасен:
- категория/пользователь с тем же name/email пропускаются;
- позиция с тем же (name, category) обновляет price/unit, новая - создаётся.

Использование:
  python -m src.manage --seed
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.app_logging import get_logger
from src.core.models.enums import UserRole
from src.core.security import hash_password
from src.crud.category_repository import CategoryRepository, ICategoryRepository
from src.crud.user_repository import IUserRepository, UserRepository
from src.crud.waste_item_repository import IWasteItemRepository, WasteItemRepository


log = get_logger("scripts.seed")


CATEGORIES: list[tuple[str, str]] = [
    ("Logam", "Barang-barang dari logam"),
    ("Plastik", "Barang-barang dari plastik"),
    ("Kertas", "Barang-barang dari kertas"),
    ("Elektronik", "Barang-barang elektronik"),
    ("Lainnya", "Barang-barang lainnya"),
]

# (категория, название, цена, единица)
WASTE_ITEMS: list[tuple[str, str, int, str]] = [
    ("Logam", "Seng bekas", 600, "Kg"),
    ("Logam", "Kaleng susu", 1000, "Kg"),
    ("Logam", "Aluminium", 12000, "Kg"),
    ("Logam", "Aki / batrai", 6000, "Kg"),
    ("Logam", "Kara - kara", 800, "Kg"),
    ("Plastik", "Botol plastik kecil atau besar", 2600, "Kg"),
    ("Plastik", "Ember / baskom plastik", 800, "Kg"),
    ("Plastik", "Piring plastik", 10000, "Kg"),
    ("Plastik", "Gelas air plastik", 800, "Kg"),
    ("Plastik", "Duplex", 700, "Kg"),
    ("Plastik", "Aqua gelas", 300, "Kg"),
    ("Plastik", "Kemasan Ale-ale, teh rio, dll", 500, "Kg"),
    ("Kertas", "Buku", 600, "Kg"),
    ("Kertas", "Karton", 1000, "Kg"),
    ("Kertas", "Sarang telor", 50, "ppm"),
    ("Kertas", "Sampul", 700, "Kg"),
    ("Elektronik", "Drum elektronik", 1000, "Kg"),
    ("Elektronik", "TV Tabung atau TV LCD", 800, "Kg"),
    ("Elektronik", "Magiccom", 800, "Kg"),
    ("Lainnya", "Besi kropos", 2600, "Kg"),
    ("Lainnya", "Kaleng minuman (sprite, fanta, dll)", 11000, "Kg"),
    ("Lainnya", "Kap kreta, kap mobil dan sejenisnya", 800, "Kg"),
    ("Lainnya", "Botol oli, Botol sampo, dll", 800, "Kg"),
    ("Lainnya", "Botol kaca atau beling", 50, "Kg"),
    ("Lainnya", "Galon air", 700, "Kg"),
    ("Lainnya", "Aqua botol", 800, "Kg"),
    ("Lainnya", "Sepam HP", 1200, "Kg"),
]

DEMO_USERS: list[dict[str, str]] = [
    {
        "name": "Admin Bank Sampah",
        "email": "admin@banksampah.com",
        "password": "admin123",
        "role": UserRole.ADMIN.value,
        "phone": "081234567890",
        "address": "Kantor Bank Sampah",
    },
    {
        "name": "User Demo",
        "email": "user@gmail.com",
        "password": "password123",
        "role": UserRole.USER.value,
        "phone": "081234567891",
        "address": "Jl. Contoh No. 123, Jakarta",
    },
]


@dataclass
class SeedReport:
    categories_created: int = 0
    items_created: int = 0
    items_updated: int = 0
    users_created: list[str] = field(default_factory=list)


async def seed_database(
    session: AsyncSession,
    *,
    category_repo: Optional[ICategoryRepository] = None,
    item_repo: Optional[IWasteItemRepository] = None,
    user_repo: Optional[IUserRepository] = None,
) -> SeedReport:
    """Заполняет справочники. commit делает вызывающий код."""
    category_repo = category_repo or CategoryRepository()
    item_repo = item_repo or WasteItemRepository()
    user_repo = user_repo or UserRepository()
    report = SeedReport()

    category_ids: dict[str, int] = {}
    for name, description in CATEGORIES:
        category = await category_repo.get_by_name(session, name=name)
        if not category:
            category = await category_repo.create(session, name=name, description=description)
            report.categories_created += 1
        category_ids[name] = int(category.id)

    for category_name, name, price, unit in WASTE_ITEMS:
        category_id = category_ids[category_name]
        existing = await item_repo.find_duplicate(session, name=name, category_id=category_id)
        if existing:
            await item_repo.update_fields(session, item_id=int(existing.id), price=Decimal(price), unit=unit)
            report.items_updated += 1
        else:
            await item_repo.create(
                session,
                name=name,
                price=Decimal(price),
                unit=unit,
                category_id=category_id,
                is_active=True,
            )
            report.items_created += 1

    for data in DEMO_USERS:
        if await user_repo.get_by_email(session, email=data["email"]):
            continue
        await user_repo.create_user(
            session,
            name=data["name"],
            email=data["email"],
            hashed_password=hash_password(data["password"]),
            phone=data["phone"],
            address=data["address"],
            role=data["role"],
        )
        report.users_created.append(data["email"])

    log.info(
        {
            "event": "seed_done",
            "categories_created": report.categories_created,
            "items_created": report.items_created,
            "items_updated": report.items_updated,
            "users_created": report.users_created,
        }
    )
    return report
