"""Statistics service (read-only)."""

from collections.abc import Awaitable, Callable
from datetime import date, datetime

from carwash.config import settings
from carwash.core.exceptions import NotFoundError
from carwash.domain.statistics import (
    CustomerOverview,
    CustomerStats,
    CustomerSummary,
    DashboardStats,
    PaymentStats,
    StatusCounts,
    compute_customer_overview,
    compute_customer_stats,
    compute_customer_summaries,
    compute_dashboard_stats,
    compute_payment_stats,
    compute_status_counts,
    is_active_customer,
)
from carwash.schemas.booking import normalize_phone
from carwash.stores.base import BookingStore, Snapshot, Unsubscribe
from carwash.utils.clock import local_now


class StatisticsService:
    """Recomputes derived statistics from a fresh store snapshot on every call."""

    def __init__(self, store: BookingStore, activity_window_days: int | None = None) -> None:
        self.store = store
        self.activity_window_days = activity_window_days or settings.activity_window_days

    async def get_dashboard_stats(self, now: date | datetime | None = None) -> DashboardStats:
        snapshot = await self.store.snapshot()
        return compute_dashboard_stats(
            snapshot.bookings, snapshot.payments, snapshot.customers, now or local_now()
        )

    async def get_payment_stats(self, now: date | datetime | None = None) -> PaymentStats:
        return compute_payment_stats(await self.store.list_payments(), now or local_now())

    async def get_status_counts(self) -> StatusCounts:
        return compute_status_counts(await self.store.list_bookings())

    async def get_customer_stats(self, phone: str) -> CustomerStats:
        phone = normalize_phone(phone)
        if await self.store.get_customer(phone) is None:
            raise NotFoundError("Customer", phone)
        snapshot = await self.store.snapshot()
        return compute_customer_stats(phone, snapshot.bookings, snapshot.payments)

    async def is_active(self, phone: str, now: date | datetime | None = None) -> bool:
        stats = await self.get_customer_stats(phone)
        return is_active_customer(stats.last_booking, now or local_now(), self.activity_window_days)

    async def get_customer_summaries(self, now: date | datetime | None = None) -> list[CustomerSummary]:
        snapshot = await self.store.snapshot()
        return compute_customer_summaries(
            snapshot.customers,
            snapshot.bookings,
            snapshot.payments,
            now or local_now(),
            self.activity_window_days,
        )

    async def get_customer_overview(self, now: date | datetime | None = None) -> CustomerOverview:
        snapshot = await self.store.snapshot()
        return compute_customer_overview(
            snapshot.customers,
            snapshot.bookings,
            snapshot.payments,
            now or local_now(),
            self.activity_window_days,
        )

    def subscribe_dashboard(
        self,
        callback: Callable[[DashboardStats], Awaitable[None] | None],
    ) -> Unsubscribe:
        """Call ``callback`` with recomputed dashboard stats after every store write."""

        def on_snapshot(snapshot: Snapshot) -> Awaitable[None] | None:
            stats = compute_dashboard_stats(
                snapshot.bookings, snapshot.payments, snapshot.customers, local_now()
            )
            return callback(stats)

        return self.store.subscribe(on_snapshot)
