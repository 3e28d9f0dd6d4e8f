# path: src/core/exceptions.py
from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, Optional, Sequence


class WasteBankError(Exception):
    """
    Базовая ошибка предметной области.

    - code: машинный код (стабилен, на него завязан UI);
    - message: текст для пользователя;
    - status_code: HTTP-статус, который отдаёт обработчик в src/main.py;
    - details: что именно не так (поле, индекс строки, ожидаемое/полученное).
    """

    code: str = "error"
    status_code: int = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details or {}

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


# --- доступ ---

class UnauthorizedError(WasteBankError):
    """Нет личности (не залогинен) или не хватает роли."""

    code = "unauthorized"
    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class AdminRequiredError(UnauthorizedError):
    """Личность есть, но роль не ADMIN."""

    code = "admin_required"
    status_code = 403

    def __init__(self, message: str = "Access denied. Only admins can perform this action.") -> None:
        super().__init__(message)


class BadCredentialsError(UnauthorizedError):
    code = "bad_credentials"

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class NotFoundError(WasteBankError):
    code = "not_found"
    status_code = 404

    def __init__(self, entity: str, entity_id: Any) -> None:
        super().__init__(f"{entity} not found", {"entity": entity, "id": entity_id})


# --- валидация транзакции ---

class TransactionValidationError(WasteBankError):
    """Общий предок ошибок валидатора строк транзакции (все - 400)."""

    code = "invalid_transaction"


class EmptyInputError(TransactionValidationError):
    code = "empty_input"

    def __init__(self) -> None:
        super().__init__("Items list is required and cannot be empty")


class InvalidLineShapeError(TransactionValidationError):
    code = "invalid_line_shape"

    def __init__(self, index: int) -> None:
        super().__init__(
            f"Invalid item at index {index}: waste_item_id, weight and price are required",
            {"index": index},
        )
        self.index = index


class NonPositiveWeightError(TransactionValidationError):
    code = "non_positive_weight"

    def __init__(self, index: int) -> None:
        super().__init__(
            f"Invalid weight at index {index}: must be a positive number",
            {"index": index},
        )
        self.index = index


class NegativePriceError(TransactionValidationError):
    code = "negative_price"

    def __init__(self, index: int) -> None:
        super().__init__(
            f"Invalid price at index {index}: must be a non-negative number",
            {"index": index},
        )
        self.index = index


class UnknownOrInactiveItemError(TransactionValidationError):
    code = "unknown_or_inactive_item"

    def __init__(self, ids: Sequence[int]) -> None:
        self.ids = list(ids)
        super().__init__(
            f"Waste items not found or inactive: {', '.join(str(i) for i in self.ids)}",
            {"ids": self.ids},
        )


class PriceMismatchError(TransactionValidationError):
    code = "price_mismatch"

    def __init__(self, item_name: str, expected: Decimal, supplied: Decimal) -> None:
        self.item_name = item_name
        self.expected = expected
        self.supplied = supplied
        super().__init__(
            f"Price mismatch for {item_name}: expected {expected}, got {supplied}",
            {"item_name": item_name, "expected": str(expected), "supplied": str(supplied)},
        )


# --- жизненный цикл ---

class InvalidTransitionError(WasteBankError):
    code = "invalid_transition"

    def __init__(self, current: str, target: str, allowed: Iterable[str]) -> None:
        self.current = current
        self.target = target
        self.allowed = sorted(allowed)
        allowed_txt = ", ".join(self.allowed) or "none"
        super().__init__(
            f"Cannot change status from {current} to {target}. Valid transitions: {allowed_txt}",
            {"current": current, "target": target, "allowed": self.allowed},
        )


class TransitionConflictError(WasteBankError):
    """Статус успел поменяться между чтением и записью (параллельные админы)."""

    code = "transition_conflict"
    status_code = 409

    def __init__(self, transaction_id: int, expected: str) -> None:
        super().__init__(
            f"Transaction {transaction_id} was modified concurrently; reload and retry",
            {"id": transaction_id, "expected_status": expected},
        )


# --- каталог / пользователи ---

class DuplicateError(WasteBankError):
    code = "duplicate"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, details)


class InvalidFieldError(WasteBankError):
    code = "invalid_field"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message, {"field": field})
        self.field = field


# --- инфраструктура ---

class BackingStoreUnavailableError(WasteBankError):
    """БД недоступна или не ответила вовремя. Не ошибка клиента, ядро не ретраит."""

    code = "backing_store_unavailable"
    status_code = 503

    def __init__(self, message: str = "Backing store is unavailable, try again later") -> None:
        super().__init__(message)


class ConstraintViolationError(WasteBankError):
    """Запись нарушает ограничение БД (unique, FK, check), которое сервис не поймал раньше."""

    code = "constraint_violation"
    status_code = 409

    def __init__(self, message: str = "The change conflicts with existing data") -> None:
        super().__init__(message)


class InvalidValueError(WasteBankError):
    """БД не приняла значение (переполнение Numeric, слишком длинная строка и т.п.)."""

    code = "invalid_value"

    def __init__(self, message: str = "A value does not fit the stored column") -> None:
        super().__init__(message)
