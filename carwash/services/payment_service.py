"""Payment recording and settlement."""

import logging
from datetime import date, datetime

from carwash.core.exceptions import NotFoundError, PersistenceFailure
from carwash.domain.filters import payments_in_range
from carwash.domain.payment_state import assert_payment_transition
from carwash.schemas.payment import PaymentCreate, PaymentRead, PaymentStatusUpdate
from carwash.services.customer_service import CustomerService
from carwash.stores.base import BookingStore
from carwash.utils.clock import local_now
from carwash.utils.identifiers import generate_payment_id

logger = logging.getLogger(__name__)


class PaymentService:
    def __init__(self, store: BookingStore, customers: CustomerService | None = None) -> None:
        self.store = store
        self.customers = customers or CustomerService(store)

    async def create_payment(self, data: PaymentCreate, now: datetime | None = None) -> PaymentRead:
        """Record a payment for a booking; the amount cannot change afterwards.

        Raises:
            NotFoundError: the booking does not exist
        """
        booking = await self.store.get_booking(data.booking_id)
        if booking is None:
            raise NotFoundError("Booking", data.booking_id)

        timestamp = now or local_now()
        payment = PaymentRead(
            payment_id=await generate_payment_id(self.store.get_payment),
            booking_id=booking.booking_id,
            customer_name=booking.customer_name,
            customer_phone=booking.phone,
            service=booking.service,
            amount=data.amount,
            payment_method=data.payment_method,
            status=data.status,
            date=data.date or timestamp.date(),
            time=data.time or timestamp.strftime("%H:%M"),
            location=booking.location,
            notes=data.notes,
            created_at=timestamp,
            updated_at=timestamp,
        )
        created = await self.store.add_payment(payment)
        logger.info(
            f"Recorded payment {created.payment_id} of {created.amount} "
            f"for booking {created.booking_id} ({created.status})"
        )

        await self.customers.refresh_customer(created.customer_phone, now=timestamp)
        return created

    async def get_payment(self, payment_id: str) -> PaymentRead:
        payment = await self.store.get_payment(payment_id)
        if payment is None:
            raise NotFoundError("Payment", payment_id)
        return payment

    async def update_payment_status(
        self,
        payment_id: str,
        update: PaymentStatusUpdate,
        now: datetime | None = None,
    ) -> PaymentRead:
        """Record a settlement outcome.

        Raises:
            NotFoundError: the payment does not exist
            InvalidTransition: the outcome is not reachable from the current status
            PersistenceFailure: the store did not apply the write
        """
        payment = await self.get_payment(payment_id)
        assert_payment_transition(payment.status, update.status)

        timestamp = now or local_now()
        persisted = await self.store.persist_payment_status(
            payment_id,
            update.status,
            timestamp,
            notes=update.notes,
            expected_status=payment.status,
        )
        if not persisted:
            raise PersistenceFailure(
                f"Payment '{payment_id}' was not updated; "
                f"it is missing or no longer '{payment.status}'"
            )
        logger.info(f"Payment {payment_id}: {payment.status} → {update.status}")

        await self.customers.refresh_customer(payment.customer_phone, now=timestamp)

        changes = {"status": update.status, "updated_at": timestamp}
        if update.notes:
            changes["notes"] = update.notes
        return payment.model_copy(update=changes)

    async def list_payments(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        status: str | None = None,
    ) -> list[PaymentRead]:
        return payments_in_range(await self.store.list_payments(), start_date, end_date, status)
