"""Dashboard statistics endpoints (read-only)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from carwash.api.deps import get_statistics_service
from carwash.config import settings
from carwash.schemas.statistics import (
    DashboardStatsResponse,
    PaymentStatsResponse,
    StatusCountsResponse,
)
from carwash.services.statistics_service import StatisticsService

router = APIRouter()


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    stats: Annotated[StatisticsService, Depends(get_statistics_service)],
) -> DashboardStatsResponse:
    """Headline counters for the admin dashboard."""
    data = await stats.get_dashboard_stats()
    return DashboardStatsResponse.model_validate(data).model_copy(
        update={"currency": settings.currency}
    )


@router.get("/status-counts", response_model=StatusCountsResponse)
async def get_status_counts(
    stats: Annotated[StatisticsService, Depends(get_statistics_service)],
) -> StatusCountsResponse:
    """Number of bookings in each status."""
    counts = await stats.get_status_counts()
    return StatusCountsResponse(counts=counts.counts)


@router.get("/payments", response_model=PaymentStatsResponse)
async def get_payment_stats(
    stats: Annotated[StatisticsService, Depends(get_statistics_service)],
) -> PaymentStatsResponse:
    """Revenue and settlement counters."""
    data = await stats.get_payment_stats()
    return PaymentStatsResponse.model_validate(data).model_copy(
        update={"currency": settings.currency}
    )
