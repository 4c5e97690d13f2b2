"""Main API router that includes all endpoint routers."""

from fastapi import APIRouter

from carwash.api.v1 import bookings, customers, dashboard, payments

api_router = APIRouter()

# Bookings
api_router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])

# Payments
api_router.include_router(payments.router, prefix="/payments", tags=["Payments"])

# Customers
api_router.include_router(customers.router, prefix="/customers", tags=["Customers"])

# Dashboard
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
