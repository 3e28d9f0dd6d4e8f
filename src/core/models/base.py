# path: src/core/models/base.py
from __future__ import annotations

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

from src.core.config import settings
from src.core.utils.case_converter import camel_case_to_snake_case


class Base(DeclarativeBase):
    """
    Общий Base для всех моделей проекта.

    - naming_convention берём из конфига (стабильные имена констрейнтов для Alembic);
    - __tablename__ по умолчанию: WasteItem -> waste_items;
    - у каждой таблицы есть целочисленный id.
    """
    __abstract__ = True

    metadata = MetaData(naming_convention=settings.db.naming_convention)

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return f"{camel_case_to_snake_case(cls.__name__)}s"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
