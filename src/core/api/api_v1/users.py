# path: src/core/api/api_v1/users.py
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.dependencies import get_current_actor, get_user_repository
from src.core.exceptions import NotFoundError
from src.core.models.db_helper import db_helper
from src.core.schemas.user import UserRead
from src.core.utils.access import Actor, require_admin
from src.crud.user_repository import IUserRepository


router = APIRouter(tags=["Users"])


@router.get("/me", response_model=UserRead)
async def get_me(
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    user_repo: Annotated[IUserRepository, Depends(get_user_repository)],
    actor: Annotated[Actor, Depends(get_current_actor)],
):
    user = await user_repo.get_by_id(session, user_id=actor.user_id)
    if not user:
        raise NotFoundError("User", actor.user_id)
    return user


@router.get("", response_model=list[UserRead])
async def get_users(
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    user_repo: Annotated[IUserRepository, Depends(get_user_repository)],
    actor: Annotated[Actor, Depends(get_current_actor)],
):
    """
    Список пользователей (только ADMIN).
    Чтение из БД только через репозиторий.
    """
    require_admin(actor)
    users = await user_repo.list_users(session)
    return list(users)
