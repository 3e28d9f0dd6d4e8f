# path: src/transactions/services/lifecycle_service.py
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Sequence

from src.app_logging import get_audit_logger, get_logger
from src.core.exceptions import NotFoundError, TransitionConflictError
from src.core.utils.access import Actor, require_admin, require_identity
from src.crud.transaction_repository import ITransactionRepository, TransactionRepository
from src.crud.waste_item_repository import IWasteItemRepository, WasteItemRepository
from src.transactions.models.enums import TransactionStatus
from src.transactions.models.transaction import Transaction
from src.transactions.schemas.transaction import StatusBucket, TransactionSummary
from src.transactions.services.state_machine import assert_can_transition
from src.transactions.services.validator import (
    ProposedLine,
    referenced_item_ids,
    round_money,
    validate_transaction_lines,
)


log = get_logger("transactions.lifecycle")
audit_log = get_audit_logger()


class TransactionLifecycleService:
    """
    Жизненный цикл транзакции сдачи вторсырья.

    - create: пользователь -> PENDING (валидатор + одна атомарная запись шапки и строк);
    - transition: только ADMIN, по графу state_machine.ALLOWED_TRANSITIONS;
    - get/list: ADMIN видит всё, остальные - только своё;
      чужая транзакция = NotFound (не подтверждаем, что id существует).

    Кто вызывает - всегда передаётся явно (Actor), сервис не знает про request.
    """

    def __init__(
        self,
        *,
        transaction_repo: Optional[ITransactionRepository] = None,
        item_repo: Optional[IWasteItemRepository] = None,
    ) -> None:
        self._tx_repo: ITransactionRepository = transaction_repo or TransactionRepository()
        self._item_repo: IWasteItemRepository = item_repo or WasteItemRepository()

    async def create(self, session, actor: Optional[Actor], lines: Sequence[ProposedLine]) -> Transaction:
        actor = require_identity(actor)

        # пустой список/битые строки отсекаем до похода в БД
        ids = referenced_item_ids(lines)
        catalog = await self._item_repo.get_by_ids(session, ids) if ids else {}
        validated = validate_transaction_lines(lines, catalog)

        tx = await self._tx_repo.create_with_items(
            session,
            user_id=actor.user_id,
            total_amount=validated.total_amount,
            total_weight=validated.total_weight,
            lines=validated.lines,
        )
        await session.commit()

        log.info(
            {
                "event": "transaction_created",
                "transaction_id": tx.id,
                "user_id": actor.user_id,
                "total_amount": validated.total_amount,
                "total_weight": validated.total_weight,
                "lines": len(validated.lines),
            }
        )
        return tx

    async def transition(
        self,
        session,
        transaction_id: int,
        actor: Optional[Actor],
        target_status: TransactionStatus | str,
        notes: Optional[str] = None,
    ) -> Transaction:
        """
        1) ADMIN? 2) транзакция есть? 3) переход разрешён графом?
        4) условный UPDATE (status всё ещё тот, что мы прочитали) -> commit
        5) audit-строка: кто, откуда, куда, когда.
        """
        actor = require_admin(actor)

        current = await self._tx_repo.get_by_id(session, transaction_id=transaction_id)
        if not current:
            raise NotFoundError("Transaction", transaction_id)

        from_status = str(current.status)
        target = assert_can_transition(from_status, target_status)

        notes = (notes or "").strip() or None
        updated_ok = await self._tx_repo.update_status(
            session,
            transaction_id=transaction_id,
            expected_status=from_status,
            new_status=target.value,
            notes=notes,
        )
        if not updated_ok:
            await session.rollback()
            raise TransitionConflictError(transaction_id, from_status)
        await session.commit()

        audit_log.info(
            {
                "event": "transaction_status_changed",
                "transaction_id": transaction_id,
                "actor_id": actor.user_id,
                "from_status": from_status,
                "to_status": target.value,
                "at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            }
        )

        updated = await self._tx_repo.get_by_id(session, transaction_id=transaction_id)
        if not updated:
            raise NotFoundError("Transaction", transaction_id)
        return updated

    async def get(self, session, transaction_id: int, actor: Optional[Actor]) -> Transaction:
        actor = require_identity(actor)
        owner_id = None if actor.is_admin else actor.user_id

        tx = await self._tx_repo.get_by_id(session, transaction_id=transaction_id, owner_id=owner_id)
        if not tx:
            raise NotFoundError("Transaction", transaction_id)
        return tx

    async def list(self, session, actor: Optional[Actor]) -> list[Transaction]:
        actor = require_identity(actor)
        owner_id = None if actor.is_admin else actor.user_id
        return await self._tx_repo.list_transactions(session, owner_id=owner_id)

    async def summary(self, session, actor: Optional[Actor]) -> TransactionSummary:
        """
        Дашборд: ADMIN - по всем транзакциям, пользователь - по своим.
        """
        actor = require_identity(actor)
        owner_id = None if actor.is_admin else actor.user_id

        rows = await self._tx_repo.totals_by_status(session, owner_id=owner_id)
        active_items = await self._item_repo.count_active(session)

        by_status = {s.value: StatusBucket() for s in TransactionStatus}
        total_count = 0
        total_amount = Decimal(0)
        total_weight = Decimal(0)

        for row in rows:
            by_status[row.status] = StatusBucket(
                count=row.count,
                total_amount=float(round_money(row.total_amount)),
                total_weight=float(round_money(row.total_weight)),
            )
            total_count += row.count
            total_amount += row.total_amount
            total_weight += row.total_weight

        return TransactionSummary(
            total_transactions=total_count,
            total_amount=float(round_money(total_amount)),
            total_weight=float(round_money(total_weight)),
            earned_amount=by_status[TransactionStatus.COMPLETED.value].total_amount,
            active_waste_items=active_items,
            by_status=by_status,
        )
