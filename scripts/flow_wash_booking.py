#!/usr/bin/env python3
"""
Complete car wash booking flow script.

DO NOT ADD BUSINESS LOGIC HERE.
This script only orchestrates API calls.
All rules live in the backend.

Usage:
    python scripts/flow_wash_booking.py --phone 0712345678 --date 2026-04-01 --time 09:30
    python scripts/flow_wash_booking.py --phone 0712345678 --date 2026-04-01 --time 09:30 --amount 25000 --cancel

Flow:
    1. Create booking
    2. Record payment
    3. Confirm booking
    4. Crew on the way
    5. Start service
    6. Complete booking and settle payment
    7. Show dashboard and customer stats
"""

import argparse
import json
import sys

import httpx

BASE_URL = "http://localhost:8000"


def api_request(method: str, endpoint: str, data: dict | None = None) -> dict:
    """Make API request."""
    url = f"{BASE_URL}{endpoint}"

    if method == "GET":
        response = httpx.get(url, timeout=10.0, follow_redirects=True)
    elif method == "POST":
        response = httpx.post(url, json=data or {}, timeout=10.0, follow_redirects=True)
    elif method == "PATCH":
        response = httpx.patch(url, json=data or {}, timeout=10.0, follow_redirects=True)
    else:
        raise ValueError(f"Unknown method: {method}")

    return {"status": response.status_code, "data": response.json() if response.text else {}}


def print_step(step: int, title: str):
    """Print step header."""
    print(f"\n{'='*60}")
    print(f"STEP {step}: {title}")
    print("="*60)


def print_result(result: dict, fields: list[str] | None = None):
    """Print result, optionally filtering fields."""
    if result["status"] >= 400:
        print(f"ERROR ({result['status']}): {json.dumps(result['data'], indent=2)}")
        return False

    print(f"Status: {result['status']}")
    if fields:
        filtered = {k: result["data"].get(k) for k in fields if k in result["data"]}
        print(json.dumps(filtered, indent=2))
    else:
        print(json.dumps(result["data"], indent=2))
    return True


def main():
    parser = argparse.ArgumentParser(description="Complete car wash booking flow")
    parser.add_argument("--phone", required=True, help="Customer phone number")
    parser.add_argument("--date", required=True, help="Service date (YYYY-MM-DD)")
    parser.add_argument("--time", required=True, help="Service time (HH:MM)")
    parser.add_argument("--service", default="Full Wash", help="Service name")
    parser.add_argument("--amount", type=int, default=20000, help="Amount in TZS")
    parser.add_argument("--cancel", action="store_true", help="Cancel the booking instead of servicing it")
    args = parser.parse_args()

    # Step 1: Create booking
    print_step(1, "Create booking")
    booking_result = api_request("POST", "/api/v1/bookings/", {
        "service": args.service,
        "date": args.date,
        "time": args.time,
        "vehicle_type": "Sedan",
        "plate_number": "T123ABC",
        "first_name": "Test",
        "last_name": "Customer",
        "phone": args.phone,
        "email": "customer@example.com",
        "location": "Masaki",
        "payment_method": "mpesa",
        "total_amount": args.amount,
    })
    if not print_result(booking_result, ["booking_id", "status", "next_action"]):
        sys.exit(1)

    booking_id = booking_result["data"]["booking_id"]
    print(f"\nBooking created: {booking_id}")

    if args.cancel:
        print_step(2, "Cancel booking")
        cancel_result = api_request("POST", f"/api/v1/bookings/{booking_id}/cancel")
        if not print_result(cancel_result, ["booking_id", "status"]):
            sys.exit(1)
        print("\n" + "="*60)
        print("FLOW COMPLETE (booking cancelled)")
        print("="*60)
        return

    # Step 2: Record payment
    print_step(2, "Record payment")
    payment_result = api_request("POST", "/api/v1/payments/", {
        "booking_id": booking_id,
        "amount": args.amount,
        "payment_method": "mpesa",
    })
    if not print_result(payment_result, ["payment_id", "amount", "status"]):
        sys.exit(1)
    payment_id = payment_result["data"]["payment_id"]

    # Steps 3-6: Walk the lifecycle
    step = 3
    for label in ("Confirm", "On Way", "Start Service", "Complete"):
        print_step(step, label)
        result = api_request("POST", f"/api/v1/bookings/{booking_id}/advance")
        if not print_result(result, ["booking_id", "status", "next_action"]):
            sys.exit(1)
        step += 1

    settle_result = api_request("PATCH", f"/api/v1/payments/{payment_id}/status", {
        "status": "completed",
    })
    if not print_result(settle_result, ["payment_id", "status"]):
        sys.exit(1)
    print("\nPayment SETTLED")

    # Step 7: Stats
    print_step(step, "Dashboard and customer stats")
    print_result(api_request("GET", "/api/v1/dashboard/stats"))
    print_result(api_request("GET", f"/api/v1/customers/{args.phone}"), ["stats", "is_active"])

    # Final summary
    print("\n" + "="*60)
    print("FULL FLOW COMPLETE")
    print("="*60)
    print(f"Booking:  {booking_id}")
    print(f"Payment:  {payment_id}")
    print(f"Paid:     {args.amount:,} TZS")


if __name__ == "__main__":
    main()
