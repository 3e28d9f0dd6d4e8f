# path: src/core/models/enums.py
from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """
    Роль пользователя.

    - USER:  сдаёт вторсырьё, видит только свои транзакции
    - ADMIN: ведёт каталог и меняет статусы транзакций
    """

    USER = "USER"
    ADMIN = "ADMIN"
