# path: src/core/dependencies.py
from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Any, Dict, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app_logging import get_logger
from src.catalog.services.catalog_service import CatalogService
from src.core.config import settings
from src.core.exceptions import UnauthorizedError
from src.core.models.db_helper import db_helper
from src.core.security import decode_token, read_actor_claims
from src.core.services.auth_service import AuthService
from src.core.utils.access import Actor
from src.crud.category_repository import CategoryRepository, ICategoryRepository
from src.crud.transaction_repository import ITransactionRepository, TransactionRepository
from src.crud.user_repository import IUserRepository, UserRepository
from src.crud.waste_item_repository import IWasteItemRepository, WasteItemRepository
from src.transactions.services.lifecycle_service import TransactionLifecycleService


# auto_error=False: отсутствие токена превращаем в UnauthorizedError (единый формат ошибки)
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.api.prefix}{settings.api.v1.prefix}{settings.api.v1.auth}/token",
    auto_error=False,
)
log = get_logger("deps")


def get_current_subject(token: Optional[str] = Depends(oauth2_scheme)) -> Dict[str, Any]:
    if not token:
        raise UnauthorizedError("Not authenticated")
    try:
        return decode_token(token)
    except JWTError as e:
        log.info({"event": "jwt_error", "error": str(e)})
        raise UnauthorizedError("Invalid or expired token") from e


# --- репозитории (stateless -> singleton) ---

@lru_cache(maxsize=1)
def _user_repo_singleton() -> UserRepository:
    return UserRepository()


def get_user_repository() -> IUserRepository:
    return _user_repo_singleton()


@lru_cache(maxsize=1)
def _category_repo_singleton() -> CategoryRepository:
    return CategoryRepository()


def get_category_repository() -> ICategoryRepository:
    return _category_repo_singleton()


@lru_cache(maxsize=1)
def _waste_item_repo_singleton() -> WasteItemRepository:
    return WasteItemRepository()


def get_waste_item_repository() -> IWasteItemRepository:
    return _waste_item_repo_singleton()


@lru_cache(maxsize=1)
def _transaction_repo_singleton() -> TransactionRepository:
    return TransactionRepository()


def get_transaction_repository() -> ITransactionRepository:
    return _transaction_repo_singleton()


# --- кто вызывает ---

async def get_current_actor(
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    payload: Annotated[Dict[str, Any], Depends(get_current_subject)],
    user_repo: Annotated[IUserRepository, Depends(get_user_repository)],
) -> Actor:
    """
    Actor из токена. Роль берём из БД, а не из claims:
    если админа разжаловали, старый токен прав не даёт.
    """
    try:
        uid, _ = read_actor_claims(payload)
    except ValueError as e:
        raise UnauthorizedError("Invalid token payload") from e

    user = await user_repo.get_by_id(session, user_id=uid)
    if not user or not user.is_active:
        log.info({"event": "actor_not_found", "uid": uid})
        raise UnauthorizedError("User not found or inactive")
    return Actor(user_id=int(user.id), role=str(user.role))


# --- сервисы ---

def get_auth_service(
    user_repo: IUserRepository = Depends(get_user_repository),
) -> AuthService:
    return AuthService(repo=user_repo)


def get_catalog_service(
    category_repo: ICategoryRepository = Depends(get_category_repository),
    item_repo: IWasteItemRepository = Depends(get_waste_item_repository),
) -> CatalogService:
    return CatalogService(category_repo=category_repo, item_repo=item_repo)


def get_transaction_service(
    transaction_repo: ITransactionRepository = Depends(get_transaction_repository),
    item_repo: IWasteItemRepository = Depends(get_waste_item_repository),
) -> TransactionLifecycleService:
    return TransactionLifecycleService(transaction_repo=transaction_repo, item_repo=item_repo)
