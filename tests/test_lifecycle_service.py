import pytest

from carwash.core.exceptions import InvalidTransition, NotFoundError, PersistenceFailure
from carwash.services.booking_service import BookingService
from carwash.services.lifecycle_service import BookingLifecycleService


@pytest.fixture
def lifecycle(store):
    return BookingLifecycleService(store)


@pytest.fixture
async def booking(store, make_booking, now):
    return await BookingService(store).create_booking(make_booking(), now=now)


async def test_repeated_advance_visits_each_status_then_fails(lifecycle, store, booking, now):
    visited = []
    current = booking
    for _ in range(4):
        current = await lifecycle.advance(current, now=now)
        visited.append(current.status)

    assert visited == ["confirmed", "on-way", "in-progress", "completed"]

    with pytest.raises(InvalidTransition):
        await lifecycle.advance(current, now=now)
    with pytest.raises(InvalidTransition):
        await lifecycle.advance(current, now=now)

    stored = await store.get_booking(booking.booking_id)
    assert stored.status == "completed"
    assert stored.updated_at == now


async def test_cancel_pending_booking(lifecycle, store, booking, now):
    cancelled = await lifecycle.cancel(booking, now=now)

    assert cancelled.status == "cancelled"
    assert (await store.get_booking(booking.booking_id)).status == "cancelled"

    with pytest.raises(InvalidTransition):
        await lifecycle.advance(cancelled, now=now)


@pytest.mark.parametrize("steps", [1, 2, 3, 4])
async def test_cancel_rejected_after_pending_and_status_unchanged(lifecycle, store, booking, now, steps):
    current = booking
    for _ in range(steps):
        current = await lifecycle.advance(current, now=now)

    with pytest.raises(InvalidTransition):
        await lifecycle.cancel(current, now=now)

    assert (await store.get_booking(booking.booking_id)).status == current.status


async def test_stale_booking_fails_with_persistence_failure(lifecycle, store, booking, now):
    await lifecycle.advance(booking, now=now)

    # ``booking`` still says pending; the stored row is confirmed
    with pytest.raises(PersistenceFailure):
        await lifecycle.advance(booking, now=now)

    assert (await store.get_booking(booking.booking_id)).status == "confirmed"


async def test_unknown_booking_is_not_found(lifecycle):
    with pytest.raises(NotFoundError):
        await lifecycle.advance_by_id("2SW-404404")


async def test_advance_by_id(lifecycle, booking, now):
    advanced = await lifecycle.advance_by_id(booking.booking_id, now=now)
    assert advanced.status == "confirmed"

    with pytest.raises(InvalidTransition):
        await lifecycle.cancel_by_id(booking.booking_id, now=now)
