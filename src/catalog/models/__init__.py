# path: src/catalog/models/__init__.py
from __future__ import annotations

from src.catalog.models.category import Category
from src.catalog.models.waste_item import WasteItem

__all__ = [
    "Category",
    "WasteItem",
]
