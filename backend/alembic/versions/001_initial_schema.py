"""Initial schema: users, institutions, resources, bookings, error reports.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column("id", sa.String(32), primary_key=True)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # Cross-entity references are plain indexed columns, not foreign keys:
    # deleting a resource must not be blocked by its past bookings.

    op.create_table(
        "users",
        _id_column(),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default=sa.text("'user'")),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("institution_id", sa.String(32), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"])
    op.create_index("ix_users_institution_id", "users", ["institution_id"])

    op.create_table(
        "institutions",
        _id_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("image_url", sa.String(1000), nullable=True),
        sa.Column("open_time", sa.String(8), nullable=False),
        sa.Column("close_time", sa.String(8), nullable=False),
        sa.Column("booking_interval", sa.Integer(), nullable=False, server_default=sa.text("60")),
        *_timestamps(),
        sa.CheckConstraint("booking_interval > 0", name="check_booking_interval_positive"),
    )

    op.create_table(
        "resources",
        _id_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(2000), nullable=True),
        sa.Column("image_url", sa.String(1000), nullable=True),
        sa.Column("institution_id", sa.String(32), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_resources_institution_id", "resources", ["institution_id"])

    op.create_table(
        "bookings",
        _id_column(),
        sa.Column("institution_id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(32), nullable=False),
        sa.Column("resource_id", sa.String(32), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(8), nullable=False),
        sa.Column("end_time", sa.String(8), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_bookings_institution_id", "bookings", ["institution_id"])
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"])
    op.create_index("ix_bookings_resource_id", "bookings", ["resource_id"])
    # Same-day occupancy lookups and the future-booking purge on resource delete
    op.create_index("ix_bookings_resource_date", "bookings", ["resource_id", "date"])
    # Admin statistics and the purge on institution update
    op.create_index("ix_bookings_institution_date", "bookings", ["institution_id", "date"])
    # Pending bookings for a user
    op.create_index("ix_bookings_user_date", "bookings", ["user_id", "date"])

    op.create_table(
        "error_reports",
        _id_column(),
        sa.Column("resource_id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(32), nullable=False),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("resolved", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("ix_error_reports_resource_id", "error_reports", ["resource_id"])
    op.create_index("ix_error_reports_user_id", "error_reports", ["user_id"])
    # Active-report checks: resource_id = ? AND resolved = false
    op.create_index("ix_error_reports_resource_resolved", "error_reports", ["resource_id", "resolved"])


def downgrade() -> None:
    op.drop_table("error_reports")
    op.drop_table("bookings")
    op.drop_table("resources")
    op.drop_table("institutions")
    op.drop_table("users")
