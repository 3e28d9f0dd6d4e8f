# path: src/core/utils/__init__.py
from __future__ import annotations

from .case_converter import camel_case_to_snake_case

# access.py импортируем напрямую (src.core.utils.access): он тянет модели,
# а models/base.py сам зависит от этого пакета.

__all__ = (
    "camel_case_to_snake_case",
)
