# src/core/models/__init__.py

__all__ = (
    "db_helper",
    "Base",
    "User",
    "UserRole",
)

from .db_helper import db_helper
from .base import Base
from .enums import UserRole
from .user import User

# Модели catalog/transactions подключаются в alembic/env.py (для autogenerate),
# здесь их не импортируем, чтобы не ловить циклический импорт через Base.
