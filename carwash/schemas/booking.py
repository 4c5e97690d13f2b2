"""Booking-related Pydantic schemas."""

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

BookingStatus = Literal["pending", "confirmed", "on-way", "in-progress", "completed", "cancelled"]

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


def normalize_phone(phone: str) -> str:
    """Phone numbers are stored without whitespace."""
    return "".join(phone.split())


class BookingBase(BaseModel):
    """Fields submitted by the customer."""

    service: str = Field(..., min_length=1, max_length=100)
    date: dt.date
    time: str = Field(..., pattern=TIME_PATTERN)
    vehicle_type: str = Field(..., min_length=1, max_length=50)
    plate_number: str = Field(..., min_length=1, max_length=20)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=7, max_length=20)
    email: str = Field(..., max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    payment_method: str = Field(..., pattern="^(cash|mpesa|card)$")
    special_requests: str | None = Field(None, max_length=1000)
    total_amount: int | None = Field(None, ge=0)

    @field_validator("phone")
    @classmethod
    def strip_phone(cls, v: str) -> str:
        return normalize_phone(v)

    @field_validator("plate_number")
    @classmethod
    def normalize_plate(cls, v: str) -> str:
        return v.strip().upper()


class BookingCreate(BookingBase):
    """Schema for creating a booking."""


class BookingRead(BookingBase):
    """Booking as held in a snapshot."""

    model_config = ConfigDict(from_attributes=True)

    booking_id: str
    status: BookingStatus = "pending"
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    @property
    def customer_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class BookingResponse(BookingRead):
    """Booking response including the next available action."""

    next_status: BookingStatus | None = None
    next_action: str = ""
    can_cancel: bool = False


class BookingListResponse(BaseModel):
    items: list[BookingResponse]
    total: int
