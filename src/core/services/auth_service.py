# path: src/core/services/auth_service.py
from __future__ import annotations

from typing import Optional

from src.app_logging import get_logger
from src.core.exceptions import BadCredentialsError, DuplicateError
from src.core.models.user import User
from src.core.schemas.user import UserCreate
from src.core.security import create_user_token, hash_password, verify_password
from src.crud.user_repository import IUserRepository, UserRepository


log = get_logger("service.auth")


class AuthService:
    """
    Сервис регистрации/аутентификации.

    Важно:
    - Repo приходит через DI (или создаётся по умолчанию),
      чтобы сервис не зависел от конкретной реализации.
    - DB-операции выполняются через репозиторий.
    """

    def __init__(self, repo: Optional[IUserRepository] = None) -> None:
        self.repo: IUserRepository = repo or UserRepository()

    # --- Регистрация ---
    async def register_user(self, session, data: UserCreate) -> User:
        email_norm = str(data.email).strip().lower()

        existing = await self.repo.get_by_email(session, email=email_norm)
        if existing:
            log.info({"event": "register_fail", "reason": "email_exists", "email": email_norm})
            raise DuplicateError("Email is already registered", {"field": "email"})

        user = await self.repo.create_user(
            session,
            name=data.name,
            email=email_norm,
            hashed_password=hash_password(data.password),
            phone=data.phone,
            address=data.address,
            role=data.role.value,
        )
        await session.commit()

        log.info({"event": "register_success", "email": email_norm, "user_id": int(user.id), "role": user.role})
        return user

    # --- Аутентификация ---
    async def authenticate(self, session, *, email: str, password: str) -> str:
        email_norm = email.strip().lower()

        user = await self.repo.get_by_email(session, email=email_norm)
        if not user:
            log.info({"event": "auth_fail", "reason": "user_not_found", "email": email_norm})
            raise BadCredentialsError()

        if not user.is_active:
            log.info({"event": "auth_fail", "reason": "inactive", "email": email_norm})
            raise BadCredentialsError()

        if not verify_password(password, user.hashed_password):
            log.info({"event": "auth_fail", "reason": "wrong_password", "email": email_norm})
            raise BadCredentialsError()

        token = create_user_token(email=email_norm, uid=int(user.id), role=user.role)
        log.info({"event": "auth_ok", "email": email_norm, "uid": int(user.id), "role": user.role})
        return token
