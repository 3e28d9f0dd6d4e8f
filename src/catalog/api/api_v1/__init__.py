# src/catalog/api/api_v1/__init__.py
from __future__ import annotations

from .categories import router as categories_router
from .waste_items import router as waste_items_router

__all__ = ["categories_router", "waste_items_router"]
