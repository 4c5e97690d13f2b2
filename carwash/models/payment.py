"""Payment database model."""

from __future__ import annotations

import datetime as dt
import uuid

from sqlalchemy import BigInteger, Date, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from carwash.database import Base


class Payment(Base):
    """Payment transaction recorded against a booking."""

    __tablename__ = "payments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    payment_id: Mapped[str] = mapped_column(
        String(20), unique=True, nullable=False, index=True
    )  # PAY-XXXXXX
    booking_id: Mapped[str] = mapped_column(
        String(20), ForeignKey("bookings.booking_id"), nullable=False, index=True
    )

    customer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    customer_phone: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    service: Mapped[str] = mapped_column(String(100), nullable=False)

    # Amount is fixed at creation
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)  # in TZS
    payment_method: Mapped[str] = mapped_column(String(20), nullable=False)  # cash, mpesa, card
    status: Mapped[str] = mapped_column(
        String(20), default="pending", nullable=False, index=True
    )  # pending, completed, failed, refunded

    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    time: Mapped[str] = mapped_column(String(5), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
