# path: src/transactions/models/enums.py
from __future__ import annotations

from enum import Enum


class TransactionStatus(str, Enum):
    """
    Статус транзакции сдачи вторсырья.

    Значения:
    - PENDING:   создана пользователем, ждёт проверки админом
    - APPROVED:  админ принял
    - REJECTED:  админ отклонил (терминальный)
    - COMPLETED: выплата/приёмка завершена (терминальный)
    """

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"
