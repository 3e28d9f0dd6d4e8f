# path: src/transactions/models/__init__.py
from __future__ import annotations

from src.transactions.models.enums import TransactionStatus
from src.transactions.models.transaction_item import TransactionItem
from src.transactions.models.transaction import Transaction

__all__ = [
    "TransactionStatus",
    "TransactionItem",
    "Transaction",
]
