# path: src/core/schemas/common.py
from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


T = TypeVar("T")


class ORMBaseSchema(BaseModel):
    """
    Базовая схема для ответов из ORM (pydantic v2).
    """
    model_config = ConfigDict(from_attributes=True)


class Envelope(BaseModel, Generic[T]):
    """
    Унифицированный ответ на мутации: {success, message, data}.
    """
    success: bool = True
    message: Optional[str] = Field(default=None, examples=["Transaction created successfully"])
    data: Optional[T] = None


class ErrorBody(BaseModel):
    code: str = Field(..., examples=["price_mismatch"])
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    success: bool = False
    error: ErrorBody
