"""SQLAlchemy-backed store."""

import logging
from datetime import UTC, datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from carwash.core.exceptions import PersistenceFailure
from carwash.models.booking import Booking
from carwash.models.customer import Customer
from carwash.models.payment import Payment
from carwash.schemas.booking import BookingCreate, BookingRead
from carwash.schemas.customer import CustomerRead
from carwash.schemas.payment import PaymentRead
from carwash.stores.base import BookingStore, ChangeNotifier

logger = logging.getLogger(__name__)


class SqlAlchemyStore(BookingStore):
    """Store bound to one async session (one per request)."""

    def __init__(self, db: AsyncSession, notifier: ChangeNotifier | None = None) -> None:
        super().__init__(notifier)
        self.db = db

    # ---- reads ----

    async def list_bookings(self) -> list[BookingRead]:
        result = await self.db.execute(
            select(Booking).order_by(Booking.created_at.desc(), Booking.booking_id.desc())
        )
        return [BookingRead.model_validate(row) for row in result.scalars().all()]

    async def list_payments(self) -> list[PaymentRead]:
        result = await self.db.execute(
            select(Payment).order_by(Payment.created_at.desc(), Payment.payment_id.desc())
        )
        return [PaymentRead.model_validate(row) for row in result.scalars().all()]

    async def list_customers(self) -> list[CustomerRead]:
        result = await self.db.execute(select(Customer).order_by(Customer.phone))
        return [CustomerRead.model_validate(row) for row in result.scalars().all()]

    async def get_booking(self, booking_id: str) -> BookingRead | None:
        result = await self.db.execute(select(Booking).where(Booking.booking_id == booking_id))
        row = result.scalar_one_or_none()
        return BookingRead.model_validate(row) if row else None

    async def get_payment(self, payment_id: str) -> PaymentRead | None:
        result = await self.db.execute(select(Payment).where(Payment.payment_id == payment_id))
        row = result.scalar_one_or_none()
        return PaymentRead.model_validate(row) if row else None

    async def get_customer(self, phone: str) -> CustomerRead | None:
        row = await self._customer_row(phone)
        return CustomerRead.model_validate(row) if row else None

    async def _customer_row(self, phone: str) -> Customer | None:
        result = await self.db.execute(select(Customer).where(Customer.phone == phone))
        return result.scalar_one_or_none()

    # ---- writes ----

    async def _commit(self, action: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise PersistenceFailure(f"Failed to {action}") from e

    async def add_booking(
        self,
        booking_id: str,
        data: BookingCreate,
        timestamp: datetime,
    ) -> BookingRead:
        booking = Booking(
            **data.model_dump(),
            booking_id=booking_id,
            status="pending",
            created_at=timestamp,
            updated_at=timestamp,
        )
        self.db.add(booking)
        await self._commit(f"create booking {booking_id}")
        created = BookingRead.model_validate(booking)
        await self.notify_changed()
        return created

    async def persist_booking_status(
        self,
        booking_id: str,
        new_status: str,
        timestamp: datetime,
        expected_status: str | None = None,
    ) -> bool:
        stmt = (
            update(Booking)
            .where(Booking.booking_id == booking_id)
            .values(status=new_status, updated_at=timestamp)
        )
        if expected_status is not None:
            stmt = stmt.where(Booking.status == expected_status)

        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to update booking {booking_id} status: {e}")
            raise PersistenceFailure(f"Failed to update booking '{booking_id}'") from e

        if result.rowcount != 1:
            await self.db.rollback()
            return False

        await self._commit(f"update booking {booking_id} status")
        await self.notify_changed()
        return True

    async def add_payment(self, payment: PaymentRead) -> PaymentRead:
        values = payment.model_dump()
        now = datetime.now(UTC)
        values["created_at"] = values["created_at"] or now
        values["updated_at"] = values["updated_at"] or values["created_at"]
        row = Payment(**values)
        self.db.add(row)
        await self._commit(f"record payment {payment.payment_id}")
        created = PaymentRead.model_validate(row)
        await self.notify_changed()
        return created

    async def persist_payment_status(
        self,
        payment_id: str,
        new_status: str,
        timestamp: datetime,
        notes: str | None = None,
        expected_status: str | None = None,
    ) -> bool:
        values: dict = {"status": new_status, "updated_at": timestamp}
        if notes:
            values["notes"] = notes
        stmt = update(Payment).where(Payment.payment_id == payment_id).values(**values)
        if expected_status is not None:
            stmt = stmt.where(Payment.status == expected_status)

        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to update payment {payment_id} status: {e}")
            raise PersistenceFailure(f"Failed to update payment '{payment_id}'") from e

        if result.rowcount != 1:
            await self.db.rollback()
            return False

        await self._commit(f"update payment {payment_id} status")
        await self.notify_changed()
        return True

    async def _insert_customer(self, row: Customer) -> bool:
        """Insert a new customer row; False when another writer inserted the phone first."""
        phone = row.phone
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info(f"Customer {phone} inserted concurrently, updating instead")
            return False
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to save customer {phone}: {e}")
            raise PersistenceFailure(f"Failed to save customer {phone}") from e
        return True

    async def save_customer(self, customer: CustomerRead) -> CustomerRead:
        values = customer.model_dump(exclude={"created_at", "updated_at"})
        now = customer.updated_at or datetime.now(UTC)
        row = await self._customer_row(customer.phone)
        if row is None:
            # Explicit timestamps so the row needs no refresh after commit
            new_row = Customer(**values, created_at=customer.created_at or now, updated_at=now)
            if await self._insert_customer(new_row):
                return await self._saved_customer(new_row)
            row = await self._customer_row(customer.phone)
            if row is None:
                raise PersistenceFailure(f"Failed to save customer {customer.phone}")

        for key, value in values.items():
            setattr(row, key, value)
        row.updated_at = now

        await self._commit(f"save customer {customer.phone}")
        return await self._saved_customer(row)

    async def _saved_customer(self, row: Customer) -> CustomerRead:
        saved = CustomerRead.model_validate(row)
        await self.notify_changed()
        return saved
