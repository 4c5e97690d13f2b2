"""Booking lifecycle service: advance and cancel bookings."""

import logging
from datetime import datetime

from carwash.core.exceptions import NotFoundError, PersistenceFailure
from carwash.domain.booking_state import advance_target, cancel_target
from carwash.schemas.booking import BookingRead
from carwash.stores.base import BookingStore
from carwash.utils.clock import local_now

logger = logging.getLogger(__name__)


class BookingLifecycleService:
    """Moves bookings along pending → confirmed → on-way → in-progress → completed.

    Every decision depends only on the booking's current status. The store
    write is a compare-and-swap on that status, so a booking changed by
    someone else in the meantime fails with ``PersistenceFailure`` instead of
    skipping a step.
    """

    def __init__(self, store: BookingStore) -> None:
        self.store = store

    async def get_booking(self, booking_id: str) -> BookingRead:
        booking = await self.store.get_booking(booking_id)
        if booking is None:
            raise NotFoundError("Booking", booking_id)
        return booking

    async def advance(self, booking: BookingRead, now: datetime | None = None) -> BookingRead:
        """Move the booking to its next status.

        Raises:
            InvalidTransition: booking is completed or cancelled
            PersistenceFailure: the store did not apply the write
        """
        target = advance_target(booking.status)
        return await self._transition(booking, target, now)

    async def cancel(self, booking: BookingRead, now: datetime | None = None) -> BookingRead:
        """Cancel a pending booking.

        Raises:
            InvalidTransition: booking is not pending
            PersistenceFailure: the store did not apply the write
        """
        target = cancel_target(booking.status)
        return await self._transition(booking, target, now)

    async def advance_by_id(self, booking_id: str, now: datetime | None = None) -> BookingRead:
        return await self.advance(await self.get_booking(booking_id), now)

    async def cancel_by_id(self, booking_id: str, now: datetime | None = None) -> BookingRead:
        return await self.cancel(await self.get_booking(booking_id), now)

    async def _transition(
        self,
        booking: BookingRead,
        target: str,
        now: datetime | None,
    ) -> BookingRead:
        timestamp = now or local_now()
        persisted = await self.store.persist_booking_status(
            booking.booking_id,
            target,
            timestamp,
            expected_status=booking.status,
        )
        if not persisted:
            raise PersistenceFailure(
                f"Booking '{booking.booking_id}' was not updated; "
                f"it is missing or no longer '{booking.status}'"
            )

        logger.info(f"Booking {booking.booking_id}: {booking.status} → {target}")
        return booking.model_copy(update={"status": target, "updated_at": timestamp})
