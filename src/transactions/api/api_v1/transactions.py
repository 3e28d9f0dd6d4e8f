# path: src/transactions/api/api_v1/transactions.py
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.dependencies import get_current_actor, get_transaction_service
from src.core.models.db_helper import db_helper
from src.core.schemas.common import Envelope
from src.core.utils.access import Actor
from src.transactions.schemas.transaction import (
    TransactionCreate,
    TransactionOut,
    TransactionSummary,
    TransactionTransition,
)
from src.transactions.services.lifecycle_service import TransactionLifecycleService
from src.transactions.services.validator import ProposedLine


router = APIRouter(tags=["transactions"])


@router.post("", response_model=Envelope[TransactionOut], status_code=status.HTTP_201_CREATED)
async def create_transaction(
    payload: TransactionCreate,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[TransactionLifecycleService, Depends(get_transaction_service)],
    actor: Annotated[Actor, Depends(get_current_actor)],
):
    """
    Заявка на сдачу: items = [{waste_item_id, weight, price}, ...].
    Цена строки должна совпадать с текущей ценой каталога (допуск 0.01).
    Итоги считает сервер, статус всегда PENDING.
    """
    lines = [
        ProposedLine(waste_item_id=ln.waste_item_id, weight=ln.weight, price=ln.price)
        for ln in payload.items
    ]
    tx = await service.create(session, actor, lines)
    return Envelope[TransactionOut](
        message="Transaction created successfully",
        data=TransactionOut.model_validate(tx),
    )


@router.get("", response_model=list[TransactionOut])
async def list_transactions(
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[TransactionLifecycleService, Depends(get_transaction_service)],
    actor: Annotated[Actor, Depends(get_current_actor)],
):
    return await service.list(session, actor)


# до "/{transaction_id}", иначе "summary" уйдёт в path-параметр
@router.get("/summary", response_model=TransactionSummary)
async def transactions_summary(
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[TransactionLifecycleService, Depends(get_transaction_service)],
    actor: Annotated[Actor, Depends(get_current_actor)],
):
    return await service.summary(session, actor)


@router.get("/{transaction_id}", response_model=TransactionOut)
async def get_transaction(
    transaction_id: int,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[TransactionLifecycleService, Depends(get_transaction_service)],
    actor: Annotated[Actor, Depends(get_current_actor)],
):
    return await service.get(session, transaction_id, actor)


@router.patch("/{transaction_id}", response_model=Envelope[TransactionOut])
async def transition_transaction(
    transaction_id: int,
    payload: TransactionTransition,
    session: Annotated[AsyncSession, Depends(db_helper.session_getter)],
    service: Annotated[TransactionLifecycleService, Depends(get_transaction_service)],
    actor: Annotated[Actor, Depends(get_current_actor)],
):
    """
    Смена статуса (только ADMIN):
    PENDING -> APPROVED | REJECTED, APPROVED -> COMPLETED | REJECTED.
    """
    tx = await service.transition(session, transaction_id, actor, payload.status, payload.notes)
    return Envelope[TransactionOut](
        message=f"Transaction status changed to {tx.status}",
        data=TransactionOut.model_validate(tx),
    )
