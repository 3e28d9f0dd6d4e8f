# path: tests/test_repositories.py
from __future__ import annotations

from decimal import Decimal

import pytest

from src.core.exceptions import NotFoundError
from src.crud.transaction_repository import TransactionRepository
from src.crud.waste_item_repository import WasteItemRepository
from src.transactions.services.validator import ValidatedLine


class InsertingSession:
    """flush раздаёт id добавленным объектам, как это сделал бы INSERT ... RETURNING."""

    def __init__(self) -> None:
        self.added: list = []
        self.flushes = 0

    def add(self, obj) -> None:
        self.added.append(obj)

    async def flush(self) -> None:
        self.flushes += 1
        for n, obj in enumerate(self.added, start=1):
            obj.id = n


async def _nothing(*args, **kwargs):
    return None


async def test_item_create_raises_when_row_cannot_be_reread(monkeypatch):
    repo = WasteItemRepository()
    monkeypatch.setattr(repo, "get_by_id", _nothing)
    session = InsertingSession()

    with pytest.raises(NotFoundError) as exc:
        await repo.create(session, name="Kardus", price=Decimal("1500"), unit="Kg", category_id=1, is_active=True)
    assert exc.value.details == {"entity": "Waste item", "id": 1}
    assert session.flushes == 1


async def test_transaction_create_raises_when_row_cannot_be_reread(monkeypatch):
    repo = TransactionRepository()
    monkeypatch.setattr(repo, "get_by_id", _nothing)
    session = InsertingSession()
    line = ValidatedLine(waste_item_id=6, weight=Decimal("2"), price=Decimal("2600"), subtotal=Decimal("5200"))

    with pytest.raises(NotFoundError) as exc:
        await repo.create_with_items(
            session,
            user_id=1,
            total_amount=Decimal("5200.00"),
            total_weight=Decimal("2.00"),
            lines=[line],
        )
    assert exc.value.details == {"entity": "Transaction", "id": 1}
