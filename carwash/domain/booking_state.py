"""Booking state machine."""

from carwash.core.exceptions import InvalidTransition

PENDING = "pending"
CONFIRMED = "confirmed"
ON_WAY = "on-way"
IN_PROGRESS = "in-progress"
COMPLETED = "completed"
CANCELLED = "cancelled"

# Linear service path; cancellation is the only branch.
BOOKING_FLOW = (PENDING, CONFIRMED, ON_WAY, IN_PROGRESS, COMPLETED)
BOOKING_STATUSES = BOOKING_FLOW + (CANCELLED,)

# Statuses that still need work from the crew
ACTIVE_BOOKING_STATUSES = frozenset({PENDING, CONFIRMED, ON_WAY, IN_PROGRESS})

NEXT_STATUS = {
    PENDING: CONFIRMED,
    CONFIRMED: ON_WAY,
    ON_WAY: IN_PROGRESS,
    IN_PROGRESS: COMPLETED,
}

BOOKING_TRANSITIONS = {
    PENDING: {CONFIRMED, CANCELLED},
    CONFIRMED: {ON_WAY},
    ON_WAY: {IN_PROGRESS},
    IN_PROGRESS: {COMPLETED},
    COMPLETED: set(),
    CANCELLED: set(),
}

ADVANCE_LABELS = {
    PENDING: "Confirm",
    CONFIRMED: "On Way",
    ON_WAY: "Start Service",
    IN_PROGRESS: "Complete",
}


def next_status(current: str) -> str | None:
    """Return the successor of ``current`` on the service path, if any."""
    return NEXT_STATUS.get(current)


def advance_label(current: str) -> str:
    return ADVANCE_LABELS.get(current, "")


def assert_booking_transition(current: str, target: str) -> None:
    allowed = BOOKING_TRANSITIONS.get(current, set())
    if target not in allowed:
        raise InvalidTransition(current, target)


def advance_target(current: str) -> str:
    """Status a booking moves to when advanced.

    Raises:
        InvalidTransition: booking is completed, cancelled or in an unknown status
    """
    target = next_status(current)
    if target is None:
        raise InvalidTransition(current)
    return target


def cancel_target(current: str) -> str:
    """Status a booking moves to when cancelled (only legal from pending)."""
    assert_booking_transition(current, CANCELLED)
    return CANCELLED
