"""Pydantic schemas for request/response validation."""

from carwash.schemas.booking import (
    BookingCreate,
    BookingListResponse,
    BookingRead,
    BookingResponse,
)
from carwash.schemas.customer import (
    CustomerContact,
    CustomerDetailResponse,
    CustomerListResponse,
    CustomerRead,
    CustomerSummaryResponse,
)
from carwash.schemas.payment import (
    PaymentCreate,
    PaymentListResponse,
    PaymentRead,
    PaymentStatusUpdate,
)
from carwash.schemas.statistics import (
    CustomerOverviewResponse,
    CustomerStatsResponse,
    DashboardStatsResponse,
    PaymentStatsResponse,
    StatusCountsResponse,
)

__all__ = [
    # Booking
    "BookingCreate",
    "BookingRead",
    "BookingResponse",
    "BookingListResponse",
    # Customer
    "CustomerContact",
    "CustomerRead",
    "CustomerSummaryResponse",
    "CustomerListResponse",
    "CustomerDetailResponse",
    # Payment
    "PaymentCreate",
    "PaymentRead",
    "PaymentStatusUpdate",
    "PaymentListResponse",
    # Statistics
    "DashboardStatsResponse",
    "CustomerStatsResponse",
    "CustomerOverviewResponse",
    "PaymentStatsResponse",
    "StatusCountsResponse",
]
