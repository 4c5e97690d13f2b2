"""Payment state machine."""

from carwash.core.exceptions import InvalidTransition

PAYMENT_STATUSES = ("pending", "completed", "failed", "refunded")
PAYMENT_METHODS = ("cash", "mpesa", "card")

PAYMENT_TRANSITIONS = {
    "pending": {"completed", "failed"},
    "completed": {"refunded"},
    "failed": set(),
    "refunded": set(),
}


def assert_payment_transition(current: str, target: str) -> None:
    allowed = PAYMENT_TRANSITIONS.get(current, set())
    if target not in allowed:
        raise InvalidTransition(current, target, entity="payment")
