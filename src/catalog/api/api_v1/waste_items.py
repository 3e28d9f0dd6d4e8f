# path: src/catalog/api/api_v1/waste_items.py
from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.catalog.schemas.catalog import (
    DeleteResult,
    WasteItemCreate,
    WasteItemDetail,
    WasteItemList,
    WasteItemOut,
    WasteItemUpdate,
)
from src.catalog.services.catalog_service import CatalogService, DeleteOutcome
from src.core.dependencies import get_catalog_service, get_current_actor
from src.core.models.db_helper import db_helper
from src.core.schemas.common import Envelope
from src.core.utils.access import Actor


router = APIRouter(tags=["waste-items"])


@router.get("", response_model=WasteItemList)
async def list_waste_items(
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    category_id: Optional[int] = Query(default=None),
    search: Optional[str] = Query(default=None, max_length=255),
    is_active: Optional[bool] = Query(default=True),
):
    """
    Каталог для формы сдачи: по умолчанию только активные позиции.
    is_active=false - выключенные (для админки).
    """
    items = await service.list_items(
        session,
        category_id=category_id,
        search=search,
        is_active=is_active,
    )
    data = [WasteItemOut.model_validate(it) for it in items]
    return WasteItemList(data=data, count=len(data))


@router.get("/{item_id}", response_model=WasteItemDetail)
async def get_waste_item(
    item_id: int,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[CatalogService, Depends(get_catalog_service)],
):
    item, stats = await service.get_item(session, item_id)
    out = WasteItemOut.model_validate(item)
    return WasteItemDetail(**out.model_dump(), statistics=stats)


@router.post("", response_model=Envelope[WasteItemOut], status_code=status.HTTP_201_CREATED)
async def create_waste_item(
    payload: WasteItemCreate,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    actor: Annotated[Actor, Depends(get_current_actor)],
):
    item = await service.create_item(session, actor, payload)
    return Envelope[WasteItemOut](
        message="Waste item created successfully",
        data=WasteItemOut.model_validate(item),
    )


@router.put("/{item_id}", response_model=Envelope[WasteItemOut])
async def update_waste_item(
    item_id: int,
    payload: WasteItemUpdate,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    actor: Annotated[Actor, Depends(get_current_actor)],
):
    item = await service.update_item(session, actor, item_id, payload)
    return Envelope[WasteItemOut](
        message="Waste item updated successfully",
        data=WasteItemOut.model_validate(item),
    )


@router.delete("/{item_id}", response_model=DeleteResult)
async def delete_waste_item(
    item_id: int,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    actor: Annotated[Actor, Depends(get_current_actor)],
):
    outcome = await service.delete_item(session, actor, item_id)
    if outcome is DeleteOutcome.DEACTIVATED:
        message = "Waste item deactivated (referenced by transactions)"
    else:
        message = "Waste item deleted successfully"
    return DeleteResult(outcome=outcome.value, message=message)
