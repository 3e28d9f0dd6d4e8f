# src/transactions/api/api_v1/__init__.py
from __future__ import annotations

from .transactions import router

__all__ = ["router"]
