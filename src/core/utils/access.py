# path: src/core/utils/access.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from src.core.exceptions import AdminRequiredError, UnauthorizedError
from src.core.models.enums import UserRole


@dataclass(frozen=True)
class Actor:
    """
    Единый формат “кто совершил действие”.

    Передаётся в сервисы явно (а не читается из request/session),
    поэтому сервисы тестируются без HTTP-окружения.
    """
    user_id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return is_admin(self.role)


def is_admin(role: Optional[str]) -> bool:
    return (role or "").upper() == UserRole.ADMIN.value


def require_identity(actor: Optional[Actor]) -> Actor:
    if actor is None or not actor.user_id:
        raise UnauthorizedError()
    return actor


def require_admin(actor: Optional[Actor]) -> Actor:
    """
    Каталог (create/update/delete) и смена статусов транзакций - только ADMIN.
    Без личности -> 401, с личностью но без роли -> 403.
    """
    actor = require_identity(actor)
    if not is_admin(actor.role):
        raise AdminRequiredError()
    return actor
