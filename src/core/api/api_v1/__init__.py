# /src/core/api/api_v1/__init__.py
from fastapi import APIRouter

from src.core.config import settings
from .users import router as users_router
from .auth import router as auth_router
from src.catalog.api.api_v1 import categories_router, waste_items_router
from src.transactions.api.api_v1 import router as transactions_router


router = APIRouter(prefix=settings.api.v1.prefix)

# /api/<v1>/users/...
router.include_router(
    users_router,
    prefix=settings.api.v1.users,
)

# /api/<v1>/auth/...
router.include_router(
    auth_router,
    prefix=settings.api.v1.auth,
)

# /api/<v1>/categories/... и /api/<v1>/waste-items/...
router.include_router(categories_router, prefix=settings.api.v1.categories)
router.include_router(waste_items_router, prefix=settings.api.v1.waste_items)

# /api/<v1>/transactions/...
router.include_router(transactions_router, prefix=settings.api.v1.transactions)
