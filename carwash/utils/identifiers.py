"""Booking and payment identifier generation."""

import random
import string
import time
from collections.abc import Awaitable, Callable

from carwash.config import settings

MAX_ATTEMPTS = 20


def _clock_suffix() -> str:
    """Last six digits of the millisecond clock."""
    return str(time.time_ns() // 1_000_000)[-6:]


def _random_suffix() -> str:
    return "".join(random.choices(string.digits, k=6))


async def _generate_unique(prefix: str, exists: Callable[[str], Awaitable[object]]) -> str:
    candidate = f"{prefix}-{_clock_suffix()}"
    for _ in range(MAX_ATTEMPTS):
        if not await exists(candidate):
            return candidate
        # Same millisecond or a wrapped clock suffix
        candidate = f"{prefix}-{_random_suffix()}"
    raise RuntimeError(f"Could not generate a unique {prefix} identifier")


async def generate_booking_id(exists: Callable[[str], Awaitable[object]]) -> str:
    """Generate a unique booking ID in format 2SW-XXXXXX.

    Args:
        exists: lookup returning a truthy value when the ID is taken

    Returns:
        str: Booking ID like '2SW-483920'
    """
    return await _generate_unique(settings.booking_id_prefix, exists)


async def generate_payment_id(exists: Callable[[str], Awaitable[object]]) -> str:
    """Generate a unique payment ID in format PAY-XXXXXX."""
    return await _generate_unique(settings.payment_id_prefix, exists)
