"""Payment-related Pydantic schemas."""

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PaymentStatus = Literal["pending", "completed", "failed", "refunded"]
PaymentMethod = Literal["cash", "mpesa", "card"]


class PaymentCreate(BaseModel):
    """Schema for recording a payment against a booking.

    Customer and service details are copied from the booking.
    """

    booking_id: str
    amount: int = Field(..., gt=0)
    payment_method: PaymentMethod
    status: Literal["pending", "completed"] = "pending"
    date: dt.date | None = None
    time: str | None = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    notes: str | None = Field(None, max_length=1000)


class PaymentStatusUpdate(BaseModel):
    status: PaymentStatus
    notes: str | None = Field(None, max_length=1000)


class PaymentRead(BaseModel):
    """Payment as held in a snapshot."""

    model_config = ConfigDict(from_attributes=True)

    payment_id: str
    booking_id: str
    customer_name: str
    customer_phone: str
    service: str
    amount: int
    payment_method: PaymentMethod
    status: PaymentStatus
    date: dt.date
    time: str
    location: str
    notes: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class PaymentListResponse(BaseModel):
    items: list[PaymentRead]
    total: int
    currency: str = "TZS"
