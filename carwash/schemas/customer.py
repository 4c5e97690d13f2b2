"""Customer-related Pydantic schemas."""

import datetime as dt

from pydantic import BaseModel, ConfigDict

from carwash.schemas.booking import BookingRead
from carwash.schemas.payment import PaymentRead
from carwash.schemas.statistics import CustomerStatsResponse


class CustomerContact(BaseModel):
    """Contact details copied from the customer's latest booking."""

    phone: str
    first_name: str
    last_name: str
    email: str
    location: str


class CustomerRead(CustomerContact):
    """Customer as held in a snapshot."""

    model_config = ConfigDict(from_attributes=True)

    total_bookings: int = 0
    total_spent: int = 0
    last_booking: dt.date | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class CustomerSummaryResponse(BaseModel):
    customer: CustomerRead
    stats: CustomerStatsResponse
    is_active: bool


class CustomerListResponse(BaseModel):
    items: list[CustomerSummaryResponse]
    total: int


class CustomerDetailResponse(CustomerSummaryResponse):
    bookings: list[BookingRead]
    payments: list[PaymentRead]
