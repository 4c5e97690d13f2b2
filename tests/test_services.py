from datetime import date, timedelta

import pytest

from carwash.core.exceptions import InvalidTransition, NotFoundError
from carwash.schemas.payment import PaymentCreate, PaymentStatusUpdate
from carwash.services.booking_service import BookingService
from carwash.services.customer_service import CustomerService
from carwash.services.lifecycle_service import BookingLifecycleService
from carwash.services.payment_service import PaymentService
from carwash.services.statistics_service import StatisticsService


@pytest.fixture
def bookings(store):
    return BookingService(store)


@pytest.fixture
def payments(store):
    return PaymentService(store)


@pytest.fixture
def stats(store):
    return StatisticsService(store)


async def test_create_booking_assigns_id_and_pending_status(bookings, make_booking, now):
    booking = await bookings.create_booking(make_booking(), now=now)

    assert booking.booking_id.startswith("2SW-")
    assert len(booking.booking_id) == len("2SW-") + 6
    assert booking.status == "pending"
    assert booking.phone == "0712345678"
    assert booking.plate_number == "T123ABC"
    assert booking.created_at == now


async def test_booking_ids_are_unique(bookings, make_booking, now):
    created = [await bookings.create_booking(make_booking(), now=now) for _ in range(5)]
    assert len({b.booking_id for b in created}) == 5


async def test_one_customer_per_phone(bookings, store, make_booking, now):
    await bookings.create_booking(make_booking(date="2024-01-02"), now=now)
    await bookings.create_booking(make_booking(date="2024-01-08", location="Mikocheni"), now=now)
    await bookings.create_booking(make_booking(phone="0755000111"), now=now)

    customers = await store.list_customers()
    assert sorted(c.phone for c in customers) == ["0712345678", "0755000111"]

    amina = await store.get_customer("0712345678")
    assert amina.total_bookings == 2
    assert amina.last_booking == date(2024, 1, 8)
    assert amina.location == "Mikocheni"
    assert amina.total_spent == 0


async def test_customer_total_spent_follows_completed_payments(bookings, payments, store, make_booking, now):
    booking = await bookings.create_booking(make_booking(), now=now)

    payment = await payments.create_payment(
        PaymentCreate(booking_id=booking.booking_id, amount=5000, payment_method="cash"),
        now=now,
    )
    assert (await store.get_customer(booking.phone)).total_spent == 0

    await payments.update_payment_status(
        payment.payment_id, PaymentStatusUpdate(status="completed"), now=now
    )
    assert (await store.get_customer(booking.phone)).total_spent == 5000

    await payments.update_payment_status(
        payment.payment_id, PaymentStatusUpdate(status="refunded", notes="Customer unhappy"), now=now
    )
    customer = await store.get_customer(booking.phone)
    assert customer.total_spent == 0
    assert (await payments.get_payment(payment.payment_id)).notes == "Customer unhappy"


async def test_payment_copies_booking_details(bookings, payments, make_booking, now):
    booking = await bookings.create_booking(make_booking(), now=now)

    payment = await payments.create_payment(
        PaymentCreate(booking_id=booking.booking_id, amount=25000, payment_method="mpesa"),
        now=now,
    )

    assert payment.payment_id.startswith("PAY-")
    assert payment.customer_name == "Amina Juma"
    assert payment.customer_phone == booking.phone
    assert payment.service == "Full Wash"
    assert payment.location == "Masaki"
    assert payment.date == now.date()
    assert payment.time == "12:00"
    assert payment.status == "pending"


async def test_payment_for_unknown_booking(payments):
    with pytest.raises(NotFoundError):
        await payments.create_payment(
            PaymentCreate(booking_id="2SW-000000", amount=100, payment_method="cash")
        )


async def test_failed_payment_cannot_be_completed(bookings, payments, make_booking, now):
    booking = await bookings.create_booking(make_booking(), now=now)
    payment = await payments.create_payment(
        PaymentCreate(booking_id=booking.booking_id, amount=100, payment_method="card"), now=now
    )
    await payments.update_payment_status(payment.payment_id, PaymentStatusUpdate(status="failed"), now=now)

    with pytest.raises(InvalidTransition):
        await payments.update_payment_status(
            payment.payment_id, PaymentStatusUpdate(status="completed"), now=now
        )


async def test_dashboard_stats_from_store(bookings, payments, stats, store, make_booking, now):
    first = await bookings.create_booking(make_booking(), now=now)
    await bookings.create_booking(
        make_booking(date=(now.date() - timedelta(days=9)).isoformat(), phone="0755000111"), now=now
    )
    lifecycle = BookingLifecycleService(store)
    current = first
    for _ in range(4):
        current = await lifecycle.advance(current, now=now)

    await payments.create_payment(
        PaymentCreate(booking_id=first.booking_id, amount=5000, payment_method="cash", status="completed"),
        now=now,
    )
    await payments.create_payment(
        PaymentCreate(booking_id=first.booking_id, amount=3000, payment_method="cash"),
        now=now,
    )

    result = await stats.get_dashboard_stats(now=now)

    assert result.total_bookings == 2
    assert result.today_bookings == 1
    assert result.pending_bookings == 1
    assert result.completed_bookings == 1
    assert result.total_revenue == 5000
    assert result.today_revenue == 5000
    assert result.pending_payments == 1
    assert result.total_customers == 2
    assert result == await stats.get_dashboard_stats(now=now)


async def test_customer_stats_and_activity(bookings, stats, make_booking, now):
    await bookings.create_booking(
        make_booking(date=(now.date() - timedelta(days=40)).isoformat()), now=now
    )
    await bookings.create_booking(
        make_booking(phone="0755000111", date=(now.date() - timedelta(days=10)).isoformat()), now=now
    )

    assert await stats.is_active("0712345678", now=now) is False
    assert await stats.is_active("0755000111", now=now) is True

    overview = await stats.get_customer_overview(now=now)
    assert overview.total_customers == 2
    assert overview.active_customers == 1
    assert overview.activity_window_days == 30


async def test_customer_stats_for_unknown_phone(stats):
    with pytest.raises(NotFoundError):
        await stats.get_customer_stats("0000000")


async def test_custom_activity_window(bookings, store, make_booking, now):
    await bookings.create_booking(
        make_booking(date=(now.date() - timedelta(days=40)).isoformat()), now=now
    )
    assert await StatisticsService(store, activity_window_days=60).is_active("0712345678", now=now)


async def test_dashboard_subscription_receives_fresh_stats(bookings, stats, make_booking, now):
    received = []
    unsubscribe = stats.subscribe_dashboard(received.append)

    await bookings.create_booking(make_booking(), now=now)
    assert received
    assert received[-1].total_bookings == 1
    assert received[-1].total_customers == 1

    unsubscribe()
    count = len(received)
    await bookings.create_booking(make_booking(), now=now)
    assert len(received) == count


async def test_async_subscribers_are_awaited(store, bookings, make_booking, now):
    seen = []

    async def on_change(snapshot):
        seen.append(len(snapshot.bookings))

    store.subscribe(on_change)
    await bookings.create_booking(make_booking(), now=now)

    assert seen[0] == 1


async def test_failing_subscriber_does_not_break_writes(store, bookings, make_booking, now):
    seen = []

    def broken(snapshot):
        raise RuntimeError("dashboard socket closed")

    store.subscribe(broken)
    store.subscribe(lambda snapshot: seen.append(len(snapshot.bookings)))

    booking = await bookings.create_booking(make_booking(), now=now)

    assert await store.get_booking(booking.booking_id) is not None
    customer = await store.get_customer(booking.phone)
    assert customer is not None
    assert customer.total_bookings == 1
    assert seen


async def test_customer_search_and_detail(bookings, store, make_booking, now):
    booking = await bookings.create_booking(make_booking(), now=now)
    await bookings.create_booking(
        make_booking(first_name="Baraka", last_name="Mushi", phone="0755000111", email="b@example.com"),
        now=now,
    )
    customers = CustomerService(store)

    found = await customers.list_customers(search="baraka", now=now)
    assert [s.customer.phone for s in found] == ["0755000111"]

    summary, own_bookings, own_payments = await customers.get_customer_detail(booking.phone, now=now)
    assert summary.stats.total_bookings == 1
    assert summary.is_active is True
    assert [b.booking_id for b in own_bookings] == [booking.booking_id]
    assert own_payments == []

    with pytest.raises(NotFoundError):
        await customers.get_customer_detail("0000000")


async def test_refresh_without_contact_skips_unknown_phone(store):
    assert await CustomerService(store).refresh_customer("0700000000") is None
    assert await store.list_customers() == []
