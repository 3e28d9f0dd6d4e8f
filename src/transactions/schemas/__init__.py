# path: src/transactions/schemas/__init__.py
from __future__ import annotations

from src.transactions.schemas.transaction import (
    StatusBucket,
    TransactionCreate,
    TransactionItemOut,
    TransactionLineIn,
    TransactionOut,
    TransactionSummary,
    TransactionTransition,
)

__all__ = [
    "StatusBucket",
    "TransactionCreate",
    "TransactionItemOut",
    "TransactionLineIn",
    "TransactionOut",
    "TransactionSummary",
    "TransactionTransition",
]
