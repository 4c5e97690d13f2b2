"""Derived statistics schemas (read-only)."""

import datetime as dt

from pydantic import BaseModel, ConfigDict


class DashboardStatsResponse(BaseModel):
    """Dashboard-wide counters."""

    model_config = ConfigDict(from_attributes=True)

    total_bookings: int
    today_bookings: int
    total_revenue: int
    today_revenue: int
    pending_bookings: int
    completed_bookings: int
    total_customers: int
    pending_payments: int
    currency: str = "TZS"


class CustomerStatsResponse(BaseModel):
    """Per-customer booking and spend rollup."""

    model_config = ConfigDict(from_attributes=True)

    phone: str
    total_bookings: int
    total_spent: int
    last_booking: dt.date | None
    completed_bookings: int
    active_bookings: int


class CustomerOverviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_customers: int
    active_customers: int
    total_revenue: int
    average_spend: int
    average_bookings: float = 0.0  # per customer, one decimal place
    activity_window_days: int
    currency: str = "TZS"


class StatusCountsResponse(BaseModel):
    counts: dict[str, int]


class PaymentStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_revenue: int
    today_revenue: int
    pending_payments: int
    completed_payments: int
    currency: str = "TZS"
