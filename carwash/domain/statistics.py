"""Derived statistics over a snapshot of bookings, payments and customers.

Every function here is a pure full scan of its inputs. Nothing is cached or
updated incrementally, so the result always matches the snapshot passed in and
does not depend on the order of the input collections. Money is summed as
integers (smallest currency unit). The overview ratios, average spend and
average bookings per customer, go through ``Decimal`` and are rounded half-up.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from carwash.domain.booking_state import (
    ACTIVE_BOOKING_STATUSES,
    BOOKING_STATUSES,
    COMPLETED,
    PENDING,
)

DEFAULT_ACTIVITY_WINDOW_DAYS = 30


@dataclass(frozen=True)
class DashboardStats:
    """Dashboard-wide counters."""

    total_bookings: int
    today_bookings: int
    total_revenue: int
    today_revenue: int
    pending_bookings: int
    completed_bookings: int
    total_customers: int
    pending_payments: int


@dataclass(frozen=True)
class CustomerStats:
    """Booking/payment rollup for one phone number."""

    phone: str
    total_bookings: int
    total_spent: int
    last_booking: date | None
    completed_bookings: int
    active_bookings: int


@dataclass(frozen=True)
class CustomerSummary:
    customer: Any
    stats: CustomerStats
    is_active: bool


@dataclass(frozen=True)
class CustomerOverview:
    total_customers: int
    active_customers: int
    total_revenue: int
    average_spend: int
    average_bookings: Decimal = Decimal("0")
    activity_window_days: int = DEFAULT_ACTIVITY_WINDOW_DAYS


@dataclass(frozen=True)
class PaymentStats:
    total_revenue: int
    today_revenue: int
    pending_payments: int
    completed_payments: int


@dataclass(frozen=True)
class StatusCounts:
    counts: dict[str, int] = field(default_factory=dict)

    def __getitem__(self, status: str) -> int:
        return self.counts.get(status, 0)


def as_of_date(now: date | datetime) -> date:
    """Calendar date of ``now`` (already localized by the caller)."""
    if isinstance(now, datetime):
        return now.date()
    return now


def _completed(payments: Iterable[Any]) -> list[Any]:
    return [p for p in payments if p.status == "completed"]


def _sum_amounts(payments: Iterable[Any]) -> int:
    return sum((int(p.amount) for p in payments), 0)


def compute_dashboard_stats(
    bookings: Sequence[Any],
    payments: Sequence[Any],
    customers: Sequence[Any],
    now: date | datetime,
) -> DashboardStats:
    today = as_of_date(now)
    completed_payments = _completed(payments)

    return DashboardStats(
        total_bookings=len(bookings),
        today_bookings=sum(1 for b in bookings if b.date == today),
        total_revenue=_sum_amounts(completed_payments),
        today_revenue=_sum_amounts(p for p in completed_payments if p.date == today),
        pending_bookings=sum(1 for b in bookings if b.status == PENDING),
        completed_bookings=sum(1 for b in bookings if b.status == COMPLETED),
        total_customers=len(customers),
        pending_payments=sum(1 for p in payments if p.status == "pending"),
    )


def compute_payment_stats(payments: Sequence[Any], now: date | datetime) -> PaymentStats:
    today = as_of_date(now)
    completed_payments = _completed(payments)
    return PaymentStats(
        total_revenue=_sum_amounts(completed_payments),
        today_revenue=_sum_amounts(p for p in completed_payments if p.date == today),
        pending_payments=sum(1 for p in payments if p.status == "pending"),
        completed_payments=len(completed_payments),
    )


def compute_status_counts(bookings: Sequence[Any]) -> StatusCounts:
    """Booking count per status; every known status is present."""
    counts = {status: 0 for status in BOOKING_STATUSES}
    for booking in bookings:
        counts[booking.status] = counts.get(booking.status, 0) + 1
    return StatusCounts(counts=counts)


def compute_customer_stats(
    phone: str,
    bookings: Sequence[Any],
    payments: Sequence[Any],
) -> CustomerStats:
    """Rollup for ``phone``; matches bookings on ``phone`` and payments on ``customer_phone``."""
    own_bookings = [b for b in bookings if b.phone == phone]
    own_payments = [p for p in payments if p.customer_phone == phone]
    return _stats_for(phone, own_bookings, own_payments)


def _stats_for(phone: str, own_bookings: Sequence[Any], own_payments: Sequence[Any]) -> CustomerStats:
    return CustomerStats(
        phone=phone,
        total_bookings=len(own_bookings),
        total_spent=_sum_amounts(_completed(own_payments)),
        last_booking=max((b.date for b in own_bookings), default=None),
        completed_bookings=sum(1 for b in own_bookings if b.status == COMPLETED),
        active_bookings=sum(1 for b in own_bookings if b.status in ACTIVE_BOOKING_STATUSES),
    )


def is_active_customer(
    last_booking: date | None,
    now: date | datetime,
    window_days: int = DEFAULT_ACTIVITY_WINDOW_DAYS,
) -> bool:
    """True when the last booking falls inside the trailing activity window.

    A booking exactly ``window_days`` old is outside the window. Bookings dated
    in the future count as active.
    """
    if last_booking is None:
        return False
    return (as_of_date(now) - last_booking).days < window_days


def compute_customer_summaries(
    customers: Sequence[Any],
    bookings: Sequence[Any],
    payments: Sequence[Any],
    now: date | datetime,
    window_days: int = DEFAULT_ACTIVITY_WINDOW_DAYS,
) -> list[CustomerSummary]:
    """Stats and activity for every customer, most bookings first (ties by phone)."""
    bookings_by_phone: dict[str, list[Any]] = defaultdict(list)
    for booking in bookings:
        bookings_by_phone[booking.phone].append(booking)
    payments_by_phone: dict[str, list[Any]] = defaultdict(list)
    for payment in payments:
        payments_by_phone[payment.customer_phone].append(payment)

    summaries = []
    for customer in customers:
        stats = _stats_for(
            customer.phone,
            bookings_by_phone.get(customer.phone, []),
            payments_by_phone.get(customer.phone, []),
        )
        summaries.append(
            CustomerSummary(
                customer=customer,
                stats=stats,
                is_active=is_active_customer(stats.last_booking, now, window_days),
            )
        )
    summaries.sort(key=lambda s: (-s.stats.total_bookings, s.customer.phone))
    return summaries


def compute_customer_overview(
    customers: Sequence[Any],
    bookings: Sequence[Any],
    payments: Sequence[Any],
    now: date | datetime,
    window_days: int = DEFAULT_ACTIVITY_WINDOW_DAYS,
) -> CustomerOverview:
    summaries = compute_customer_summaries(customers, bookings, payments, now, window_days)
    total_revenue = _sum_amounts(_completed(payments))

    average_spend = 0
    if customers:
        average_spend = int(
            (Decimal(total_revenue) / Decimal(len(customers))).quantize(
                Decimal("1"), rounding=ROUND_HALF_UP
            )
        )

    average_bookings = Decimal("0")
    if customers:
        average_bookings = (Decimal(len(bookings)) / Decimal(len(customers))).quantize(
            Decimal("0.1"), rounding=ROUND_HALF_UP
        )

    return CustomerOverview(
        total_customers=len(customers),
        active_customers=sum(1 for s in summaries if s.is_active),
        total_revenue=total_revenue,
        average_spend=average_spend,
        average_bookings=average_bookings,
        activity_window_days=window_days,
    )
