"""Customer records and their rollups."""

import logging
from datetime import datetime

from carwash.config import settings
from carwash.core.exceptions import NotFoundError
from carwash.domain.filters import customer_matches_search
from carwash.domain.statistics import (
    CustomerSummary,
    compute_customer_stats,
    compute_customer_summaries,
    is_active_customer,
)
from carwash.schemas.booking import BookingRead, normalize_phone
from carwash.schemas.customer import CustomerContact, CustomerRead
from carwash.schemas.payment import PaymentRead
from carwash.stores.base import BookingStore
from carwash.utils.clock import local_now

logger = logging.getLogger(__name__)


class CustomerService:
    """Keeps exactly one customer per phone with rollups matching its bookings and payments."""

    def __init__(self, store: BookingStore, activity_window_days: int | None = None) -> None:
        self.store = store
        self.activity_window_days = activity_window_days or settings.activity_window_days

    async def refresh_customer(
        self,
        phone: str,
        contact: CustomerContact | None = None,
        now: datetime | None = None,
    ) -> CustomerRead | None:
        """Create or update the customer for ``phone`` and recompute its rollups.

        ``contact`` replaces the stored contact details when given. Without it
        only an existing customer is refreshed; ``None`` is returned when
        there is nothing to refresh. Safe to call repeatedly.
        """
        timestamp = now or local_now()
        existing = await self.store.get_customer(phone)
        if existing is None and contact is None:
            return None

        snapshot = await self.store.snapshot()
        stats = compute_customer_stats(phone, snapshot.bookings, snapshot.payments)
        details = contact or existing
        contact_fields = set(CustomerContact.model_fields)

        customer = CustomerRead(
            **details.model_dump(include=contact_fields),
            total_bookings=stats.total_bookings,
            total_spent=stats.total_spent,
            last_booking=stats.last_booking,
            created_at=existing.created_at if existing else timestamp,
            updated_at=timestamp,
        )
        if existing is None:
            logger.info(f"Created customer {phone}")
        return await self.store.save_customer(customer)

    async def list_customers(
        self,
        search: str = "",
        now: datetime | None = None,
    ) -> list[CustomerSummary]:
        snapshot = await self.store.snapshot()
        customers = [c for c in snapshot.customers if customer_matches_search(c, search)]
        return compute_customer_summaries(
            customers,
            snapshot.bookings,
            snapshot.payments,
            now or local_now(),
            self.activity_window_days,
        )

    async def get_customer_detail(
        self,
        phone: str,
        now: datetime | None = None,
    ) -> tuple[CustomerSummary, list[BookingRead], list[PaymentRead]]:
        """Customer summary with its bookings and payments.

        Raises:
            NotFoundError: no customer has this phone number
        """
        phone = normalize_phone(phone)
        customer = await self.store.get_customer(phone)
        if customer is None:
            raise NotFoundError("Customer", phone)

        snapshot = await self.store.snapshot()
        stats = compute_customer_stats(phone, snapshot.bookings, snapshot.payments)
        summary = CustomerSummary(
            customer=customer,
            stats=stats,
            is_active=is_active_customer(
                stats.last_booking, now or local_now(), self.activity_window_days
            ),
        )
        bookings = [b for b in snapshot.bookings if b.phone == phone]
        payments = [p for p in snapshot.payments if p.customer_phone == phone]
        return summary, bookings, payments
