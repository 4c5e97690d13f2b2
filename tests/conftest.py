import os

# Must be set before carwash.config is imported anywhere
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")

from datetime import datetime  # noqa: E402
from zoneinfo import ZoneInfo  # noqa: E402

import pytest  # noqa: E402

from carwash.schemas.booking import BookingCreate  # noqa: E402
from carwash.stores.memory import MemoryStore  # noqa: E402

TZ = ZoneInfo("Africa/Dar_es_Salaam")


@pytest.fixture
def now():
    return datetime(2024, 1, 10, 12, 0, tzinfo=TZ)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def booking_payload():
    return {
        "service": "Full Wash",
        "date": "2024-01-10",
        "time": "09:30",
        "vehicle_type": "SUV",
        "plate_number": "t 123 abc",
        "first_name": "Amina",
        "last_name": "Juma",
        "phone": "0712 345 678",
        "email": "amina@example.com",
        "location": "Masaki",
        "payment_method": "mpesa",
        "total_amount": 25000,
    }


@pytest.fixture
def make_booking(booking_payload):
    def factory(**overrides) -> BookingCreate:
        return BookingCreate(**{**booking_payload, **overrides})

    return factory
