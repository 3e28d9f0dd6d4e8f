# path: tests/test_models.py
from __future__ import annotations

import pytest

from src.catalog.models import Category, WasteItem
from src.core.config import settings
from src.core.models import Base, User
from src.core.utils import camel_case_to_snake_case
from src.transactions.models import Transaction, TransactionItem


@pytest.mark.parametrize(
    "name,expected",
    [
        ("WasteItem", "waste_item"),
        ("TransactionItem", "transaction_item"),
        ("SomeSDK", "some_sdk"),
        ("SDKClient", "sdk_client"),
    ],
)
def test_camel_case_to_snake_case(name, expected):
    assert camel_case_to_snake_case(name) == expected


def test_tables_are_registered():
    assert {"users", "categories", "waste_items", "transactions", "transaction_items"} <= set(Base.metadata.tables)
    assert User.__tablename__ == "users"
    assert Category.__tablename__ == "categories"
    assert WasteItem.__tablename__ == "waste_items"
    assert Transaction.__tablename__ == "transactions"
    assert TransactionItem.__tablename__ == "transaction_items"


def test_waste_item_name_unique_per_category():
    constraints = {c.name for c in Base.metadata.tables["waste_items"].constraints}
    assert "uq_waste_items_name_category" in constraints


def test_line_columns_hold_validated_scale():
    # weight(3) * price(2) -> subtotal(5): сохраняется без округления
    columns = Base.metadata.tables["transaction_items"].c
    assert columns.weight.type.scale == settings.bank.weight_places
    assert columns.price.type.scale == settings.bank.price_places
    assert columns.subtotal.type.scale == settings.bank.weight_places + settings.bank.price_places
