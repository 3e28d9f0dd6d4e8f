# path: src/crud/user_repository.py
from __future__ import annotations

from typing import Optional, Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.app_logging import get_logger
from src.core.models import User


log = get_logger("repo.user")


class IUserRepository(Protocol):
    async def get_by_id(self, session: AsyncSession, *, user_id: int) -> Optional[User]: ...
    async def get_by_email(self, session: AsyncSession, *, email: str) -> Optional[User]: ...

    async def create_user(
        self,
        session: AsyncSession,
        *,
        name: str,
        email: str,
        hashed_password: str,
        phone: Optional[str],
        address: Optional[str],
        role: str,
    ) -> User: ...

    async def list_users(self, session: AsyncSession) -> Sequence[User]: ...


class UserRepository(IUserRepository):
    """
    Репозиторий пользователей.

    Правило проекта:
    - Все обращения к Postgres/SQLAlchemy - только здесь (src/crud/).
    """

    async def get_by_id(self, session: AsyncSession, *, user_id: int) -> Optional[User]:
        res = await session.execute(select(User).where(User.id == int(user_id)))
        return res.scalar_one_or_none()

    async def get_by_email(self, session: AsyncSession, *, email: str) -> Optional[User]:
        log.info({"event": "get_by_email", "email": email})
        stmt = select(User).where(User.email == email)
        return (await session.execute(stmt)).scalar_one_or_none()

    async def create_user(
        self,
        session: AsyncSession,
        *,
        name: str,
        email: str,
        hashed_password: str,
        phone: Optional[str],
        address: Optional[str],
        role: str,
    ) -> User:
        log.info({"event": "create_user_start", "email": email, "role": role})

        user = User(
            name=name,
            email=email,
            hashed_password=hashed_password,
            phone=phone,
            address=address,
            role=role,
            is_active=True,
        )
        session.add(user)
        await session.flush()
        await session.refresh(user)

        log.info({"event": "create_user_done", "user_id": user.id})
        return user

    async def list_users(self, session: AsyncSession) -> Sequence[User]:
        log.info({"event": "list_users"})
        res = await session.execute(select(User).order_by(User.id.desc()))
        return list(res.scalars())
