# path: src/catalog/api/api_v1/categories.py
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.catalog.schemas.catalog import CategoryCreate, CategoryOut
from src.catalog.services.catalog_service import CatalogService
from src.core.dependencies import get_catalog_service, get_current_actor
from src.core.models.db_helper import db_helper
from src.core.schemas.common import Envelope
from src.core.utils.access import Actor


router = APIRouter(tags=["categories"])


@router.get("", response_model=list[CategoryOut])
async def list_categories(
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[CatalogService, Depends(get_catalog_service)],
):
    return list(await service.list_categories(session))


@router.post("", response_model=Envelope[CategoryOut], status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreate,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    actor: Annotated[Actor, Depends(get_current_actor)],
):
    category = await service.create_category(session, actor, payload)
    return Envelope[CategoryOut](
        message="Category created successfully",
        data=CategoryOut.model_validate(category),
    )
