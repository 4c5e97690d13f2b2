"""Booking creation and listing."""

import logging
from datetime import datetime

from carwash.core.exceptions import NotFoundError
from carwash.domain.filters import DateFilter, filter_bookings, todays_bookings
from carwash.domain.statistics import as_of_date
from carwash.schemas.booking import BookingCreate, BookingRead
from carwash.schemas.customer import CustomerContact
from carwash.services.customer_service import CustomerService
from carwash.stores.base import BookingStore
from carwash.utils.clock import local_now
from carwash.utils.identifiers import generate_booking_id

logger = logging.getLogger(__name__)


class BookingService:
    def __init__(self, store: BookingStore, customers: CustomerService | None = None) -> None:
        self.store = store
        self.customers = customers or CustomerService(store)

    async def create_booking(self, data: BookingCreate, now: datetime | None = None) -> BookingRead:
        """Create a pending booking and create or refresh its customer."""
        timestamp = now or local_now()
        booking_id = await generate_booking_id(self.store.get_booking)
        booking = await self.store.add_booking(booking_id, data, timestamp)
        logger.info(f"Created booking {booking_id} for {data.phone} on {data.date} {data.time}")

        await self.customers.refresh_customer(
            data.phone,
            CustomerContact(
                phone=data.phone,
                first_name=data.first_name,
                last_name=data.last_name,
                email=data.email,
                location=data.location,
            ),
            now=timestamp,
        )
        return booking

    async def get_booking(self, booking_id: str) -> BookingRead:
        booking = await self.store.get_booking(booking_id)
        if booking is None:
            raise NotFoundError("Booking", booking_id)
        return booking

    async def list_bookings(
        self,
        search: str = "",
        status: str | None = None,
        date_filter: DateFilter = "all",
        now: datetime | None = None,
    ) -> list[BookingRead]:
        bookings = await self.store.list_bookings()
        return filter_bookings(
            bookings,
            as_of_date(now or local_now()),
            search=search,
            status=status,
            date_filter=date_filter,
        )

    async def list_todays_bookings(self, now: datetime | None = None) -> list[BookingRead]:
        return todays_bookings(await self.store.list_bookings(), as_of_date(now or local_now()))
