"""SQLAlchemy ORM models for tenant-scoped scheduling tables.

These tables are plain CRUD data owned by a restaurant. The lifecycle
coordinator deletes them by ``restaurant_id`` during teardown. Rows that
reference an employee cascade when that employee is offboarded.
"""

from datetime import date, datetime, time
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Time,
)
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, CreatedAtMixin, IdMixin


def _restaurant_fk() -> Mapped[str]:
    return mapped_column(
        String(36),
        ForeignKey("restaurants.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )


def _employee_fk(nullable: bool = False) -> Mapped[Any]:
    return mapped_column(
        String(36),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=nullable,
        index=True,
    )


class ShiftModel(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "shifts"

    restaurant_id: Mapped[str] = _restaurant_fk()
    employee_id: Mapped[str | None] = _employee_fk(nullable=True)
    shift_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    position: Mapped[str | None] = mapped_column(String(64), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)


class BusinessHoursModel(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "business_hours"

    restaurant_id: Mapped[str] = _restaurant_fk()
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    open_time: Mapped[time] = mapped_column(Time, nullable=False)
    close_time: Mapped[time] = mapped_column(Time, nullable=False)
    is_closed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class StaffingRequirementModel(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "staffing_requirements"

    restaurant_id: Mapped[str] = _restaurant_fk()
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    time_slot_start: Mapped[time] = mapped_column(Time, nullable=False)
    time_slot_end: Mapped[time] = mapped_column(Time, nullable=False)
    min_staff_required: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    optimal_staff: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    position_requirements: Mapped[dict[str, Any] | None] = mapped_column(
        JSON, nullable=True
    )


class BlockedDateModel(Base, IdMixin, CreatedAtMixin):
    """Dates the restaurant does not schedule (holidays, Carnival, ...)."""

    __tablename__ = "blocked_dates"

    restaurant_id: Mapped[str] = _restaurant_fk()
    blocked_on: Mapped[date] = mapped_column("date", Date, nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)


class ShiftTemplateModel(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "shift_templates"

    restaurant_id: Mapped[str] = _restaurant_fk()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    position: Mapped[str | None] = mapped_column(String(64), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class TimeOffRequestModel(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "time_off_requests"

    restaurant_id: Mapped[str] = _restaurant_fk()
    employee_id: Mapped[str] = _employee_fk()
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")
    reviewed_by: Mapped[str | None] = mapped_column(String(64), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class ShiftSwapRequestModel(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "shift_swap_requests"

    restaurant_id: Mapped[str] = _restaurant_fk()
    requester_id: Mapped[str] = _employee_fk()
    requester_shift_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("shifts.id", ondelete="CASCADE"), nullable=False
    )
    requested_employee_id: Mapped[str] = _employee_fk()
    requested_shift_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("shifts.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default="pending_employee"
    )
    requester_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    denial_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
