# path: src/transactions/services/state_machine.py
from __future__ import annotations

from typing import Dict, FrozenSet, Union

from src.core.exceptions import InvalidTransitionError
from src.transactions.models.enums import TransactionStatus


StatusLike = Union[TransactionStatus, str]

# текущий статус -> куда можно перейти
ALLOWED_TRANSITIONS: Dict[TransactionStatus, FrozenSet[TransactionStatus]] = {
    TransactionStatus.PENDING: frozenset({TransactionStatus.APPROVED, TransactionStatus.REJECTED}),
    TransactionStatus.APPROVED: frozenset({TransactionStatus.COMPLETED, TransactionStatus.REJECTED}),
    TransactionStatus.REJECTED: frozenset(),   # терминальный
    TransactionStatus.COMPLETED: frozenset(),  # терминальный
}

TERMINAL_STATUSES: FrozenSet[TransactionStatus] = frozenset(
    s for s, nxt in ALLOWED_TRANSITIONS.items() if not nxt
)


def _coerce(status: StatusLike) -> TransactionStatus:
    if isinstance(status, TransactionStatus):
        return status
    return TransactionStatus(str(status).strip().upper())


def allowed_next(current: StatusLike) -> FrozenSet[TransactionStatus]:
    try:
        return ALLOWED_TRANSITIONS[_coerce(current)]
    except ValueError:
        return frozenset()


def can_transition(current: StatusLike, target: StatusLike) -> bool:
    """
    PENDING -> COMPLETED (прыжок), X -> X и выход из терминального - запрещены.
    """
    try:
        target_s = _coerce(target)
    except ValueError:
        return False
    return target_s in allowed_next(current)


def assert_can_transition(current: StatusLike, target: StatusLike) -> TransactionStatus:
    """Возвращает целевой статус или бросает InvalidTransitionError."""
    if not can_transition(current, target):
        current_v = current.value if isinstance(current, TransactionStatus) else str(current)
        target_v = target.value if isinstance(target, TransactionStatus) else str(target)
        raise InvalidTransitionError(
            current_v,
            target_v,
            [s.value for s in allowed_next(current)],
        )
    return _coerce(target)
