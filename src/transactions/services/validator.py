# path: src/transactions/services/validator.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Protocol, Sequence

from src.core.config import settings
from src.core.exceptions import (
    EmptyInputError,
    InvalidLineShapeError,
    NegativePriceError,
    NonPositiveWeightError,
    PriceMismatchError,
    UnknownOrInactiveItemError,
)


class CatalogEntry(Protocol):
    """Что валидатору нужно от позиции каталога (WasteItem подходит)."""

    name: str
    price: Decimal
    is_active: bool


@dataclass(frozen=True)
class ProposedLine:
    waste_item_id: Optional[int]
    weight: Any
    price: Any


@dataclass(frozen=True)
class ValidatedLine:
    waste_item_id: int
    weight: Decimal
    price: Decimal
    subtotal: Decimal


@dataclass(frozen=True)
class ValidatedTransaction:
    lines: list[ValidatedLine]
    total_amount: Decimal
    total_weight: Decimal


def _to_decimal(value: Any) -> Optional[Decimal]:
    """
    Число -> Decimal. bool/строки/NaN/inf -> None.
    float идёт через str(), чтобы 0.1 не превращался в 0.1000000000000000055...
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, (int, float)):
        try:
            d = Decimal(str(value))
        except InvalidOperation:
            return None
    else:
        return None
    if not d.is_finite():
        return None
    return d


def round_money(value: Decimal, places: Optional[int] = None) -> Decimal:
    """Округление half-up до центов (по умолчанию 2 знака)."""
    places = settings.bank.amount_places if places is None else places
    quant = Decimal(1).scaleb(-places)
    return value.quantize(quant, rounding=ROUND_HALF_UP)


def _fit_scale(value: Decimal, places: int) -> Optional[Decimal]:
    """Округление до масштаба колонки; None, если число не помещается в контекст Decimal."""
    try:
        return round_money(value, places)
    except InvalidOperation:
        return None


def _check_line_values(lines: Sequence[ProposedLine]) -> list[tuple[int, Decimal, Decimal]]:
    """
    Шаги 1-3 (fail-fast, по строкам): форма, вес > 0, цена >= 0.

    Вес и цена приводятся к масштабу колонок (weight_places / price_places),
    чтобы в БД легло ровно то, из чего посчитан subtotal.
    Вес, который после округления стал 0 (0.0004 кг), отклоняется.
    """
    if not lines:
        raise EmptyInputError()

    weight_places = settings.bank.weight_places
    price_places = settings.bank.price_places

    out: list[tuple[int, Decimal, Decimal]] = []
    for idx, line in enumerate(lines):
        if line is None or line.waste_item_id is None or line.weight is None or line.price is None:
            raise InvalidLineShapeError(idx)

        weight = _to_decimal(line.weight)
        if weight is None or weight <= 0:
            raise NonPositiveWeightError(idx)
        weight = _fit_scale(weight, weight_places)
        if weight is None or weight <= 0:
            raise NonPositiveWeightError(idx)

        price = _to_decimal(line.price)
        if price is None or price < 0:
            raise NegativePriceError(idx)
        price = _fit_scale(price, price_places)
        if price is None:
            raise NegativePriceError(idx)

        out.append((int(line.waste_item_id), weight, price))
    return out


def referenced_item_ids(lines: Sequence[ProposedLine]) -> list[int]:
    """id позиций в порядке появления, без повторов (для одного SELECT ... IN)."""
    seen: dict[int, None] = {}
    for line in lines:
        if line is not None and line.waste_item_id is not None:
            seen.setdefault(int(line.waste_item_id), None)
    return list(seen)


def validate_transaction_lines(
    lines: Sequence[ProposedLine],
    catalog: Mapping[int, CatalogEntry],
    *,
    tolerance: Optional[Decimal] = None,
) -> ValidatedTransaction:
    """
    Проверка заявки против каталога. Чистая функция, в БД не ходит.

    catalog - найденные позиции {id: WasteItem}; неактивные можно класть,
    они всё равно будут отклонены.

    Порядок:
    1-3. форма строки, вес, цена (см. _check_line_values)
    4.   все id есть в каталоге и активны - иначе список проблемных id
    5.   цена клиента совпадает с текущей ценой каталога (±tolerance),
         иначе PriceMismatch (клиент видел устаревший прайс)
    6.   subtotal = weight * price, итоги округляются до 0.01 half-up
    """
    tolerance = settings.bank.price_tolerance if tolerance is None else tolerance
    checked = _check_line_values(lines)

    missing: list[int] = []
    for item_id, _, _ in checked:
        entry = catalog.get(item_id)
        if (entry is None or not entry.is_active) and item_id not in missing:
            missing.append(item_id)
    if missing:
        raise UnknownOrInactiveItemError(missing)

    validated: list[ValidatedLine] = []
    total_amount = Decimal(0)
    total_weight = Decimal(0)

    for item_id, weight, price in checked:
        entry = catalog[item_id]
        expected = Decimal(entry.price)
        if abs(expected - price) > tolerance:
            raise PriceMismatchError(entry.name, expected, price)

        subtotal = weight * price
        total_amount += subtotal
        total_weight += weight
        validated.append(
            ValidatedLine(waste_item_id=item_id, weight=weight, price=price, subtotal=subtotal)
        )

    return ValidatedTransaction(
        lines=validated,
        total_amount=round_money(total_amount),
        total_weight=round_money(total_weight),
    )
