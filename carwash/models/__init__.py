"""Database models."""

from carwash.models.booking import Booking
from carwash.models.customer import Customer
from carwash.models.payment import Payment

__all__ = [
    "Booking",
    "Customer",
    "Payment",
]
