"""Initial database schema.

Revision ID: 001_initial
Revises: None
Create Date: 2024-01-05

Creates the car wash admin tables:
- Bookings
- Payments
- Customers
"""

from typing import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers
revision: str = "001_initial"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create all database tables."""

    # ==================== BOOKINGS ====================
    op.create_table(
        "bookings",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("booking_id", sa.String(20), unique=True, nullable=False, index=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False, index=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("service", sa.String(100), nullable=False),
        sa.Column("vehicle_type", sa.String(50), nullable=False),
        sa.Column("plate_number", sa.String(20), nullable=False),
        sa.Column("date", sa.Date, nullable=False, index=True),
        sa.Column("time", sa.String(5), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("payment_method", sa.String(20), nullable=False),
        sa.Column("special_requests", sa.Text),
        sa.Column("total_amount", sa.Integer),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending", index=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # ==================== PAYMENTS ====================
    op.create_table(
        "payments",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("payment_id", sa.String(20), unique=True, nullable=False, index=True),
        sa.Column(
            "booking_id",
            sa.String(20),
            sa.ForeignKey("bookings.booking_id"),
            nullable=False,
            index=True,
        ),
        sa.Column("customer_name", sa.String(200), nullable=False),
        sa.Column("customer_phone", sa.String(20), nullable=False, index=True),
        sa.Column("service", sa.String(100), nullable=False),
        sa.Column("amount", sa.BigInteger, nullable=False),
        sa.Column("payment_method", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending", index=True),
        sa.Column("date", sa.Date, nullable=False, index=True),
        sa.Column("time", sa.String(5), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("notes", sa.Text),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # ==================== CUSTOMERS ====================
    op.create_table(
        "customers",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("phone", sa.String(20), unique=True, nullable=False, index=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("total_bookings", sa.Integer, nullable=False, server_default="0"),
        sa.Column("total_spent", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("last_booking", sa.Date),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    """Drop all database tables in reverse order."""
    op.drop_table("customers")
    op.drop_table("payments")
    op.drop_table("bookings")
