"""Customer endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from carwash.api.deps import get_customer_service, get_statistics_service
from carwash.config import settings
from carwash.domain.statistics import CustomerSummary
from carwash.schemas.customer import (
    CustomerDetailResponse,
    CustomerListResponse,
    CustomerRead,
    CustomerSummaryResponse,
)
from carwash.schemas.statistics import CustomerOverviewResponse, CustomerStatsResponse
from carwash.services.customer_service import CustomerService
from carwash.services.statistics_service import StatisticsService

router = APIRouter()


def to_summary(summary: CustomerSummary) -> CustomerSummaryResponse:
    return CustomerSummaryResponse(
        customer=CustomerRead.model_validate(summary.customer),
        stats=CustomerStatsResponse.model_validate(summary.stats),
        is_active=summary.is_active,
    )


@router.get("/", response_model=CustomerListResponse)
async def list_customers(
    service: Annotated[CustomerService, Depends(get_customer_service)],
    search: str = Query(default="", max_length=100),
) -> CustomerListResponse:
    """List customers with their stats, most bookings first."""
    summaries = await service.list_customers(search=search)
    return CustomerListResponse(items=[to_summary(s) for s in summaries], total=len(summaries))


@router.get("/overview", response_model=CustomerOverviewResponse)
async def get_customer_overview(
    stats: Annotated[StatisticsService, Depends(get_statistics_service)],
) -> CustomerOverviewResponse:
    """Totals shown above the customer list."""
    overview = await stats.get_customer_overview()
    return CustomerOverviewResponse.model_validate(overview).model_copy(
        update={"currency": settings.currency}
    )


@router.get("/{phone}", response_model=CustomerDetailResponse)
async def get_customer(
    phone: str,
    service: Annotated[CustomerService, Depends(get_customer_service)],
) -> CustomerDetailResponse:
    """Customer with stats, booking history and payments."""
    summary, bookings, payments = await service.get_customer_detail(phone)
    return CustomerDetailResponse(
        **to_summary(summary).model_dump(),
        bookings=bookings,
        payments=payments,
    )
