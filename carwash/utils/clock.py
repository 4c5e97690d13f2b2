"""Business-local clock."""

from datetime import datetime
from zoneinfo import ZoneInfo

from carwash.config import settings


def local_now() -> datetime:
    """Current time in the business timezone; its date is "today" for reports."""
    return datetime.now(ZoneInfo(settings.timezone))
