"""In-process store for local development and tests."""

from datetime import datetime

from carwash.core.exceptions import PersistenceFailure
from carwash.schemas.booking import BookingCreate, BookingRead
from carwash.schemas.customer import CustomerRead
from carwash.schemas.payment import PaymentRead
from carwash.stores.base import BookingStore, ChangeNotifier


def _sort_time(value: datetime | None) -> float:
    return value.timestamp() if value else 0.0


class MemoryStore(BookingStore):
    """Keeps entities in dictionaries keyed by their natural identifiers.

    Returned objects are copies, so callers cannot mutate stored state.
    """

    def __init__(self, notifier: ChangeNotifier | None = None) -> None:
        super().__init__(notifier)
        self._bookings: dict[str, BookingRead] = {}
        self._payments: dict[str, PaymentRead] = {}
        self._customers: dict[str, CustomerRead] = {}

    async def list_bookings(self) -> list[BookingRead]:
        bookings = sorted(
            self._bookings.values(),
            key=lambda b: (_sort_time(b.created_at), b.booking_id),
            reverse=True,
        )
        return [b.model_copy() for b in bookings]

    async def list_payments(self) -> list[PaymentRead]:
        payments = sorted(
            self._payments.values(),
            key=lambda p: (_sort_time(p.created_at), p.payment_id),
            reverse=True,
        )
        return [p.model_copy() for p in payments]

    async def list_customers(self) -> list[CustomerRead]:
        return [c.model_copy() for c in self._customers.values()]

    async def get_booking(self, booking_id: str) -> BookingRead | None:
        booking = self._bookings.get(booking_id)
        return booking.model_copy() if booking else None

    async def get_payment(self, payment_id: str) -> PaymentRead | None:
        payment = self._payments.get(payment_id)
        return payment.model_copy() if payment else None

    async def get_customer(self, phone: str) -> CustomerRead | None:
        customer = self._customers.get(phone)
        return customer.model_copy() if customer else None

    async def add_booking(
        self,
        booking_id: str,
        data: BookingCreate,
        timestamp: datetime,
    ) -> BookingRead:
        if booking_id in self._bookings:
            raise PersistenceFailure(f"Booking '{booking_id}' already exists")
        booking = BookingRead(
            **data.model_dump(),
            booking_id=booking_id,
            status="pending",
            created_at=timestamp,
            updated_at=timestamp,
        )
        self._bookings[booking_id] = booking
        await self.notify_changed()
        return booking.model_copy()

    async def persist_booking_status(
        self,
        booking_id: str,
        new_status: str,
        timestamp: datetime,
        expected_status: str | None = None,
    ) -> bool:
        booking = self._bookings.get(booking_id)
        if booking is None:
            return False
        if expected_status is not None and booking.status != expected_status:
            return False
        self._bookings[booking_id] = booking.model_copy(
            update={"status": new_status, "updated_at": timestamp}
        )
        await self.notify_changed()
        return True

    async def add_payment(self, payment: PaymentRead) -> PaymentRead:
        if payment.payment_id in self._payments:
            raise PersistenceFailure(f"Payment '{payment.payment_id}' already exists")
        self._payments[payment.payment_id] = payment.model_copy()
        await self.notify_changed()
        return payment.model_copy()

    async def persist_payment_status(
        self,
        payment_id: str,
        new_status: str,
        timestamp: datetime,
        notes: str | None = None,
        expected_status: str | None = None,
    ) -> bool:
        payment = self._payments.get(payment_id)
        if payment is None:
            return False
        if expected_status is not None and payment.status != expected_status:
            return False
        update = {"status": new_status, "updated_at": timestamp}
        if notes:
            update["notes"] = notes
        self._payments[payment_id] = payment.model_copy(update=update)
        await self.notify_changed()
        return True

    async def save_customer(self, customer: CustomerRead) -> CustomerRead:
        self._customers[customer.phone] = customer.model_copy()
        await self.notify_changed()
        return customer.model_copy()
