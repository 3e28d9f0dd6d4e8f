# /src/core/schemas/user.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from src.core.config import settings
from src.core.models.enums import UserRole


class UserCreate(BaseModel):
    """
    Регистрация. Длину пароля и роль проверяем здесь, дубль email - в AuthService.
    """
    name: str = Field(..., min_length=1, max_length=128, examples=["User Demo"])
    email: EmailStr
    password: str
    phone: str = Field(..., min_length=1, max_length=32, examples=["081234567891"])
    address: str = Field(..., min_length=1, max_length=512, examples=["Jl. Contoh No. 123, Jakarta"])
    role: UserRole = UserRole.USER

    @field_validator("name", "phone", "address")
    @classmethod
    def _strip(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("password")
    @classmethod
    def _password_length(cls, v: str) -> str:
        if len(v) < settings.auth.min_password_length:
            raise ValueError(f"password must be at least {settings.auth.min_password_length} characters")
        return v


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    email: EmailStr
    phone: Optional[str] = None
    address: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None


class UserBrief(BaseModel):
    """Владелец транзакции в ответах (без контактов)."""
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    email: EmailStr


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
