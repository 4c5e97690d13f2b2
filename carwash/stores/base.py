"""Base store interface.

The store is the persistence collaborator for the lifecycle and statistics
services. It hands out detached snapshots and performs single-row writes.
Business rules should NOT live in stores - only reads, writes and change
notification.
"""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime

from carwash.schemas.booking import BookingCreate, BookingRead
from carwash.schemas.customer import CustomerRead
from carwash.schemas.payment import PaymentRead

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    """Full set of entities at one point in time."""

    bookings: list[BookingRead] = field(default_factory=list)
    payments: list[PaymentRead] = field(default_factory=list)
    customers: list[CustomerRead] = field(default_factory=list)


SnapshotCallback = Callable[[Snapshot], Awaitable[None] | None]
Unsubscribe = Callable[[], None]


class ChangeNotifier:
    """Fan-out of fresh snapshots to subscribers after each committed write.

    One notifier is shared by every store instance in the process so that
    subscriptions outlive request-scoped stores.
    """

    def __init__(self) -> None:
        self._subscribers: list[SnapshotCallback] = []

    def subscribe(self, callback: SnapshotCallback) -> Unsubscribe:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @property
    def has_subscribers(self) -> bool:
        return bool(self._subscribers)

    async def publish(self, snapshot: Snapshot) -> None:
        """Deliver ``snapshot`` to every subscriber.

        The write has already been committed, so a failing subscriber is
        logged and skipped and never fails the caller.
        """
        for callback in list(self._subscribers):
            try:
                result = callback(snapshot)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception(f"Change subscriber {callback!r} failed")


class BookingStore(ABC):
    """Abstract base class for booking/payment/customer persistence."""

    def __init__(self, notifier: ChangeNotifier | None = None) -> None:
        self.notifier = notifier or ChangeNotifier()

    # ---- reads ----

    @abstractmethod
    async def list_bookings(self) -> list[BookingRead]:
        """All bookings, newest first."""
        pass

    @abstractmethod
    async def list_payments(self) -> list[PaymentRead]:
        """All payments, newest first."""
        pass

    @abstractmethod
    async def list_customers(self) -> list[CustomerRead]:
        """All customers."""
        pass

    @abstractmethod
    async def get_booking(self, booking_id: str) -> BookingRead | None:
        pass

    @abstractmethod
    async def get_payment(self, payment_id: str) -> PaymentRead | None:
        pass

    @abstractmethod
    async def get_customer(self, phone: str) -> CustomerRead | None:
        pass

    async def snapshot(self) -> Snapshot:
        return Snapshot(
            bookings=await self.list_bookings(),
            payments=await self.list_payments(),
            customers=await self.list_customers(),
        )

    # ---- writes ----

    @abstractmethod
    async def add_booking(
        self,
        booking_id: str,
        data: BookingCreate,
        timestamp: datetime,
    ) -> BookingRead:
        """Insert a new pending booking.

        Raises:
            PersistenceFailure: the write was rejected
        """
        pass

    @abstractmethod
    async def persist_booking_status(
        self,
        booking_id: str,
        new_status: str,
        timestamp: datetime,
        expected_status: str | None = None,
    ) -> bool:
        """Set status and updated timestamp.

        When ``expected_status`` is given the write only happens if the stored
        status still equals it (compare-and-swap).

        Returns:
            True if a row was updated, False if the booking is missing or the
            stored status changed underneath the caller
        """
        pass

    @abstractmethod
    async def add_payment(self, payment: PaymentRead) -> PaymentRead:
        pass

    @abstractmethod
    async def persist_payment_status(
        self,
        payment_id: str,
        new_status: str,
        timestamp: datetime,
        notes: str | None = None,
        expected_status: str | None = None,
    ) -> bool:
        pass

    @abstractmethod
    async def save_customer(self, customer: CustomerRead) -> CustomerRead:
        """Insert or replace the customer keyed by phone."""
        pass

    # ---- notification ----

    def subscribe(self, callback: SnapshotCallback) -> Unsubscribe:
        """Invoke ``callback`` with a fresh snapshot after every write."""
        return self.notifier.subscribe(callback)

    async def notify_changed(self) -> None:
        if not self.notifier.has_subscribers:
            return
        logger.debug("Publishing snapshot to subscribers")
        await self.notifier.publish(await self.snapshot())
