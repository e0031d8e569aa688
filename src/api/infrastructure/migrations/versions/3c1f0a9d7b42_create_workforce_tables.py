"""create workforce tables

Restaurants (tenants), their employees, the tenant-scoped scheduling
tables and in-app notifications. Foreign keys to restaurants are ON DELETE
RESTRICT: teardown removes dependents explicitly, in order, before the
restaurant row. Schedule rows that point at an employee (or at a shift)
cascade, so removing an employee also removes their shifts, time-off and
swap requests.

Revision ID: 3c1f0a9d7b42
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d7b42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.String(length=36), nullable=False)  # UUID


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)


def _restaurant_id() -> sa.Column:
    return sa.Column("restaurant_id", sa.String(length=36), nullable=False)


def _restaurant_fk(table: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        ["restaurant_id"],
        ["restaurants.id"],
        name=f"fk_{table}_restaurant_id",
        ondelete="RESTRICT",
    )


def _restaurant_index(table: str) -> None:
    op.create_index(f"ix_{table}_restaurant_id", table, ["restaurant_id"])


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "restaurants",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("owner_email", sa.String(length=320), nullable=False),
        sa.Column("timezone", sa.String(length=64), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_restaurants_owner_email", "restaurants", ["owner_email"])

    op.create_table(
        "employees",
        _id(),
        _restaurant_id(),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("first_name", sa.String(length=255), nullable=False),
        sa.Column("last_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("position", sa.String(length=255), nullable=True),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("hire_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        _restaurant_fk("employees"),
        sa.UniqueConstraint("email", name="uq_employees_email"),
        sa.CheckConstraint("role IN ('manager', 'staff')", name="ck_employees_role"),
        sa.CheckConstraint(
            "status IN ('active', 'inactive')", name="ck_employees_status"
        ),
    )
    _restaurant_index("employees")
    op.create_index("ix_employees_user_id", "employees", ["user_id"])

    op.create_table(
        "shifts",
        _id(),
        _restaurant_id(),
        sa.Column("employee_id", sa.String(length=36), nullable=True),
        sa.Column("shift_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("position", sa.String(length=64), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        _restaurant_fk("shifts"),
        sa.ForeignKeyConstraint(
            ["employee_id"],
            ["employees.id"],
            name="fk_shifts_employee_id",
            ondelete="CASCADE",
        ),
    )
    _restaurant_index("shifts")
    op.create_index("ix_shifts_employee_id", "shifts", ["employee_id"])
    op.create_index("ix_shifts_shift_date", "shifts", ["shift_date"])

    op.create_table(
        "business_hours",
        _id(),
        _restaurant_id(),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("open_time", sa.Time(), nullable=False),
        sa.Column("close_time", sa.Time(), nullable=False),
        sa.Column("is_closed", sa.Boolean(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        _restaurant_fk("business_hours"),
    )
    _restaurant_index("business_hours")

    op.create_table(
        "staffing_requirements",
        _id(),
        _restaurant_id(),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("time_slot_start", sa.Time(), nullable=False),
        sa.Column("time_slot_end", sa.Time(), nullable=False),
        sa.Column("min_staff_required", sa.Integer(), nullable=False),
        sa.Column("optimal_staff", sa.Integer(), nullable=False),
        sa.Column("position_requirements", sa.JSON(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        _restaurant_fk("staffing_requirements"),
    )
    _restaurant_index("staffing_requirements")

    op.create_table(
        "blocked_dates",
        _id(),
        _restaurant_id(),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        _restaurant_fk("blocked_dates"),
    )
    _restaurant_index("blocked_dates")

    op.create_table(
        "shift_templates",
        _id(),
        _restaurant_id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("position", sa.String(length=64), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        _restaurant_fk("shift_templates"),
    )
    _restaurant_index("shift_templates")

    op.create_table(
        "time_off_requests",
        _id(),
        _restaurant_id(),
        sa.Column("employee_id", sa.String(length=36), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("reviewed_by", sa.String(length=64), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        _restaurant_fk("time_off_requests"),
        sa.ForeignKeyConstraint(
            ["employee_id"],
            ["employees.id"],
            name="fk_time_off_requests_employee_id",
            ondelete="CASCADE",
        ),
    )
    _restaurant_index("time_off_requests")
    op.create_index(
        "ix_time_off_requests_employee_id", "time_off_requests", ["employee_id"]
    )

    op.create_table(
        "shift_swap_requests",
        _id(),
        _restaurant_id(),
        sa.Column("requester_id", sa.String(length=36), nullable=False),
        sa.Column("requester_shift_id", sa.String(length=36), nullable=False),
        sa.Column("requested_employee_id", sa.String(length=36), nullable=False),
        sa.Column("requested_shift_id", sa.String(length=36), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("requester_notes", sa.Text(), nullable=True),
        sa.Column("denial_reason", sa.Text(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        _restaurant_fk("shift_swap_requests"),
        sa.ForeignKeyConstraint(
            ["requester_id"],
            ["employees.id"],
            name="fk_shift_swap_requests_requester_id",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["requested_employee_id"],
            ["employees.id"],
            name="fk_shift_swap_requests_requested_employee_id",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["requester_shift_id"],
            ["shifts.id"],
            name="fk_shift_swap_requests_requester_shift_id",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["requested_shift_id"],
            ["shifts.id"],
            name="fk_shift_swap_requests_requested_shift_id",
            ondelete="CASCADE",
        ),
    )
    _restaurant_index("shift_swap_requests")
    op.create_index(
        "ix_shift_swap_requests_requester_id", "shift_swap_requests", ["requester_id"]
    )
    op.create_index(
        "ix_shift_swap_requests_requested_employee_id",
        "shift_swap_requests",
        ["requested_employee_id"],
    )

    op.create_table(
        "notifications",
        _id(),
        _restaurant_id(),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("link", sa.String(length=255), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        _restaurant_fk("notifications"),
    )
    _restaurant_index("notifications")
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        "notifications",
        "shift_swap_requests",
        "time_off_requests",
        "shift_templates",
        "blocked_dates",
        "staffing_requirements",
        "business_hours",
        "shifts",
        "employees",
        "restaurants",
    ):
        op.drop_table(table)
