# path: src/core/api/api_v1/auth.py
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from src.app_logging import get_logger
from src.core.dependencies import get_auth_service
from src.core.models.db_helper import db_helper
from src.core.schemas.common import Envelope
from src.core.schemas.user import TokenResponse, UserCreate, UserRead
from src.core.services.auth_service import AuthService


router = APIRouter(tags=["auth"])
log = get_logger("api.auth")


@router.post("/signup", response_model=Envelope[UserRead], status_code=status.HTTP_201_CREATED)
async def auth_signup(
    payload: UserCreate,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[AuthService, Depends(get_auth_service)],
):
    """
    Регистрация: name, email, password (>= 6), phone, address, role (USER по умолчанию).
    Дубль email -> 400 duplicate.
    """
    user = await service.register_user(session, payload)
    return Envelope[UserRead](message="Account created", data=UserRead.model_validate(user))


@router.post("/token", response_model=TokenResponse)
async def auth_token(
    form: Annotated[OAuth2PasswordRequestForm, Depends()],
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[AuthService, Depends(get_auth_service)],
):
    """
    OAuth2 Password:
    - Принимает form.username (email) и form.password (x-www-form-urlencoded)
    - Возвращает {"access_token": "...", "token_type": "bearer"}
    """
    token = await service.authenticate(
        session,
        email=form.username,
        password=form.password,
    )
    return TokenResponse(access_token=token)
