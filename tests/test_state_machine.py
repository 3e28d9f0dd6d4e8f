# path: tests/test_state_machine.py
from __future__ import annotations

from itertools import product

import pytest

from src.core.exceptions import InvalidTransitionError
from src.transactions.models.enums import TransactionStatus as S
from src.transactions.services.state_machine import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    allowed_next,
    assert_can_transition,
    can_transition,
)


ALLOWED = {
    (S.PENDING, S.APPROVED),
    (S.PENDING, S.REJECTED),
    (S.APPROVED, S.COMPLETED),
    (S.APPROVED, S.REJECTED),
}


@pytest.mark.parametrize("current,target", list(product(S, S)))
def test_transition_table(current, target):
    assert can_transition(current, target) is ((current, target) in ALLOWED)


def test_every_status_has_an_entry():
    assert set(ALLOWED_TRANSITIONS) == set(S)


def test_terminal_statuses():
    assert TERMINAL_STATUSES == {S.REJECTED, S.COMPLETED}
    for status in TERMINAL_STATUSES:
        assert allowed_next(status) == frozenset()


def test_strings_are_accepted():
    assert can_transition("PENDING", "APPROVED")
    assert can_transition("approved", "completed")
    assert not can_transition("PENDING", "COMPLETED")


def test_unknown_status_is_never_allowed():
    assert not can_transition("PENDING", "PAID")
    assert not can_transition("PAID", "APPROVED")
    assert allowed_next("PAID") == frozenset()


def test_assert_returns_target():
    assert assert_can_transition("PENDING", S.APPROVED) is S.APPROVED


def test_skipping_approval_is_rejected_with_allowed_list():
    with pytest.raises(InvalidTransitionError) as ei:
        assert_can_transition(S.PENDING, S.COMPLETED)
    err = ei.value
    assert err.current == "PENDING"
    assert err.target == "COMPLETED"
    assert err.allowed == ["APPROVED", "REJECTED"]
    assert err.status_code == 400


def test_leaving_terminal_state_is_rejected():
    with pytest.raises(InvalidTransitionError) as ei:
        assert_can_transition(S.REJECTED, S.PENDING)
    assert ei.value.allowed == []
    assert "none" in ei.value.message
