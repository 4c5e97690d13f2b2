import pytest

from carwash.core.exceptions import InvalidTransition
from carwash.domain.booking_state import (
    BOOKING_FLOW,
    BOOKING_STATUSES,
    advance_label,
    advance_target,
    assert_booking_transition,
    cancel_target,
    next_status,
)
from carwash.domain.payment_state import assert_payment_transition


def test_advance_walks_the_service_path():
    visited = []
    status = "pending"
    while next_status(status):
        status = advance_target(status)
        visited.append(status)

    assert visited == ["confirmed", "on-way", "in-progress", "completed"]
    assert tuple(["pending"] + visited) == BOOKING_FLOW


@pytest.mark.parametrize("status", ["completed", "cancelled", "unknown"])
def test_advance_from_terminal_status_is_rejected(status):
    with pytest.raises(InvalidTransition) as exc:
        advance_target(status)
    assert exc.value.status_code == 409
    assert exc.value.current == status


def test_cancel_only_from_pending():
    assert cancel_target("pending") == "cancelled"

    for status in BOOKING_STATUSES:
        if status == "pending":
            continue
        with pytest.raises(InvalidTransition):
            cancel_target(status)


@pytest.mark.parametrize(
    "current,target",
    [
        ("pending", "completed"),
        ("pending", "in-progress"),
        ("confirmed", "pending"),
        ("completed", "in-progress"),
        ("cancelled", "pending"),
        ("confirmed", "cancelled"),
    ],
)
def test_skips_backward_moves_and_uncancel_are_rejected(current, target):
    with pytest.raises(InvalidTransition):
        assert_booking_transition(current, target)


def test_advance_labels():
    assert advance_label("pending") == "Confirm"
    assert advance_label("confirmed") == "On Way"
    assert advance_label("on-way") == "Start Service"
    assert advance_label("in-progress") == "Complete"
    assert advance_label("completed") == ""


def test_payment_transitions():
    assert_payment_transition("pending", "completed")
    assert_payment_transition("pending", "failed")
    assert_payment_transition("completed", "refunded")

    with pytest.raises(InvalidTransition) as exc:
        assert_payment_transition("failed", "completed")
    assert "payment" in exc.value.detail
