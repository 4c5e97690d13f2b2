"""Booking endpoints."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, status

from carwash.api.deps import get_booking_service, get_lifecycle_service
from carwash.domain.booking_state import PENDING, advance_label, next_status
from carwash.schemas.booking import (
    BookingCreate,
    BookingListResponse,
    BookingRead,
    BookingResponse,
    BookingStatus,
)
from carwash.services.booking_service import BookingService
from carwash.services.lifecycle_service import BookingLifecycleService

router = APIRouter()


def to_response(booking: BookingRead) -> BookingResponse:
    return BookingResponse(
        **booking.model_dump(),
        next_status=next_status(booking.status),
        next_action=advance_label(booking.status),
        can_cancel=booking.status == PENDING,
    )


@router.get("/", response_model=BookingListResponse)
async def list_bookings(
    service: Annotated[BookingService, Depends(get_booking_service)],
    search: str = Query(default="", max_length=100),
    status_filter: BookingStatus | None = Query(default=None, alias="status"),
    date_filter: Literal["all", "today", "week"] = Query(default="all"),
    limit: int | None = Query(default=None, ge=1, le=100),
) -> BookingListResponse:
    """List bookings, newest first, with search and filters.

    ``total`` counts every match; ``limit`` only trims the returned items.
    """
    bookings = await service.list_bookings(
        search=search, status=status_filter, date_filter=date_filter
    )
    items = bookings[:limit] if limit else bookings
    return BookingListResponse(items=[to_response(b) for b in items], total=len(bookings))


@router.get("/today", response_model=BookingListResponse)
async def list_todays_bookings(
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> BookingListResponse:
    """Today's bookings ordered by time slot."""
    bookings = await service.list_todays_bookings()
    return BookingListResponse(items=[to_response(b) for b in bookings], total=len(bookings))


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: BookingCreate,
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> BookingResponse:
    """Create a new booking."""
    booking = await service.create_booking(booking_data)
    return to_response(booking)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> BookingResponse:
    """Get booking details."""
    return to_response(await service.get_booking(booking_id))


@router.post("/{booking_id}/advance", response_model=BookingResponse)
async def advance_booking(
    booking_id: str,
    lifecycle: Annotated[BookingLifecycleService, Depends(get_lifecycle_service)],
) -> BookingResponse:
    """Move a booking to its next status."""
    return to_response(await lifecycle.advance_by_id(booking_id))


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: str,
    lifecycle: Annotated[BookingLifecycleService, Depends(get_lifecycle_service)],
) -> BookingResponse:
    """Cancel a pending booking."""
    return to_response(await lifecycle.cancel_by_id(booking_id))
