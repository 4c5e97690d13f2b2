"""Search and filter helpers for admin listings."""

from collections.abc import Sequence
from datetime import date, timedelta
from typing import Any, Literal

DateFilter = Literal["all", "today", "week"]

WEEK_DAYS = 7


def booking_matches_search(booking: Any, term: str) -> bool:
    """Case-insensitive match on name, booking ID and plate; substring match on phone."""
    if not term:
        return True
    needle = term.lower()
    return (
        needle in booking.first_name.lower()
        or needle in booking.last_name.lower()
        or needle in booking.booking_id.lower()
        or needle in booking.plate_number.lower()
        or term in booking.phone
    )


def booking_matches_date(booking: Any, date_filter: DateFilter, today: date) -> bool:
    if date_filter == "today":
        return booking.date == today
    if date_filter == "week":
        return booking.date >= today - timedelta(days=WEEK_DAYS)
    return True


def filter_bookings(
    bookings: Sequence[Any],
    today: date,
    search: str = "",
    status: str | None = None,
    date_filter: DateFilter = "all",
) -> list[Any]:
    return [
        b
        for b in bookings
        if booking_matches_search(b, search)
        and (status is None or b.status == status)
        and booking_matches_date(b, date_filter, today)
    ]


def todays_bookings(bookings: Sequence[Any], today: date) -> list[Any]:
    """Bookings scheduled for ``today`` ordered by time slot."""
    return sorted((b for b in bookings if b.date == today), key=lambda b: (b.time, b.booking_id))


def customer_matches_search(customer: Any, term: str) -> bool:
    if not term:
        return True
    needle = term.lower()
    return (
        needle in customer.first_name.lower()
        or needle in customer.last_name.lower()
        or needle in (customer.email or "").lower()
        or term in customer.phone
    )


def payments_in_range(
    payments: Sequence[Any],
    start: date | None = None,
    end: date | None = None,
    status: str | None = None,
) -> list[Any]:
    """Payments dated within [start, end], newest first."""
    selected = [
        p
        for p in payments
        if (start is None or p.date >= start)
        and (end is None or p.date <= end)
        and (status is None or p.status == status)
    ]
    return sorted(selected, key=lambda p: (p.date, p.time, p.payment_id), reverse=True)
