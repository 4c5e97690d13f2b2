"""Booking database model."""

from __future__ import annotations

import datetime as dt
import uuid

from sqlalchemy import Date, DateTime, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from carwash.database import Base


class Booking(Base):
    """Car-wash booking.

    Bookings are never deleted; cancellation is a status.
    """

    __tablename__ = "bookings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    booking_id: Mapped[str] = mapped_column(
        String(20), unique=True, nullable=False, index=True
    )  # 2SW-XXXXXX

    # Customer contact (phone links to customers.phone)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    # Service & vehicle
    service: Mapped[str] = mapped_column(String(100), nullable=False)
    vehicle_type: Mapped[str] = mapped_column(String(50), nullable=False)
    plate_number: Mapped[str] = mapped_column(String(20), nullable=False)

    # Scheduling
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    time: Mapped[str] = mapped_column(String(5), nullable=False)  # HH:MM
    location: Mapped[str] = mapped_column(String(255), nullable=False)

    payment_method: Mapped[str] = mapped_column(String(20), nullable=False)
    special_requests: Mapped[str | None] = mapped_column(Text)
    total_amount: Mapped[int | None] = mapped_column(Integer)  # in TZS

    status: Mapped[str] = mapped_column(
        String(20), default="pending", nullable=False, index=True
    )  # pending, confirmed, on-way, in-progress, completed, cancelled

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
