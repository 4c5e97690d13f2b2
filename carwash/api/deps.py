"""API dependencies wiring stores into services."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from carwash.database import get_db
from carwash.services.booking_service import BookingService
from carwash.services.customer_service import CustomerService
from carwash.services.lifecycle_service import BookingLifecycleService
from carwash.services.payment_service import PaymentService
from carwash.services.statistics_service import StatisticsService
from carwash.stores.base import BookingStore, ChangeNotifier
from carwash.stores.sqlalchemy_store import SqlAlchemyStore

# Shared by all request-scoped stores so subscriptions survive the request
change_notifier = ChangeNotifier()


async def get_store(db: Annotated[AsyncSession, Depends(get_db)]) -> BookingStore:
    """Store for the current request's database session."""
    return SqlAlchemyStore(db, notifier=change_notifier)


StoreDep = Annotated[BookingStore, Depends(get_store)]


def get_customer_service(store: StoreDep) -> CustomerService:
    return CustomerService(store)


def get_booking_service(
    store: StoreDep,
    customers: Annotated[CustomerService, Depends(get_customer_service)],
) -> BookingService:
    return BookingService(store, customers)


def get_payment_service(
    store: StoreDep,
    customers: Annotated[CustomerService, Depends(get_customer_service)],
) -> PaymentService:
    return PaymentService(store, customers)


def get_lifecycle_service(store: StoreDep) -> BookingLifecycleService:
    return BookingLifecycleService(store)


def get_statistics_service(store: StoreDep) -> StatisticsService:
    return StatisticsService(store)
