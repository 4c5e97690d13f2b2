"""Payment endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from carwash.api.deps import get_payment_service
from carwash.config import settings
from carwash.core.exceptions import ValidationError
from carwash.schemas.payment import (
    PaymentCreate,
    PaymentListResponse,
    PaymentRead,
    PaymentStatus,
    PaymentStatusUpdate,
)
from carwash.services.payment_service import PaymentService

router = APIRouter()


@router.get("/", response_model=PaymentListResponse)
async def list_payments(
    service: Annotated[PaymentService, Depends(get_payment_service)],
    status_filter: PaymentStatus | None = Query(default=None, alias="status"),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
) -> PaymentListResponse:
    """List payments, newest first, optionally within a date range."""
    if start_date and end_date and start_date > end_date:
        raise ValidationError("start_date must not be after end_date")
    payments = await service.list_payments(start_date, end_date, status_filter)
    return PaymentListResponse(items=payments, total=len(payments), currency=settings.currency)


@router.post("/", response_model=PaymentRead, status_code=status.HTTP_201_CREATED)
async def create_payment(
    payment_data: PaymentCreate,
    service: Annotated[PaymentService, Depends(get_payment_service)],
) -> PaymentRead:
    """Record a payment for a booking."""
    return await service.create_payment(payment_data)


@router.get("/{payment_id}", response_model=PaymentRead)
async def get_payment(
    payment_id: str,
    service: Annotated[PaymentService, Depends(get_payment_service)],
) -> PaymentRead:
    return await service.get_payment(payment_id)


@router.patch("/{payment_id}/status", response_model=PaymentRead)
async def update_payment_status(
    payment_id: str,
    update: PaymentStatusUpdate,
    service: Annotated[PaymentService, Depends(get_payment_service)],
) -> PaymentRead:
    """Record the settlement outcome of a payment."""
    return await service.update_payment_status(payment_id, update)
