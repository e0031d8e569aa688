"""SQLAlchemy ORM model for the employees table."""

from datetime import date
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    Date,
    ForeignKey,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, CreatedAtMixin, IdMixin


class EmployeeModel(Base, IdMixin, CreatedAtMixin):
    """ORM model for employees table.

    ``user_id`` holds the identity provider's principal id. There is no
    database-level link to the provider; the lifecycle coordinator keeps the
    two in step. ``email`` is unique so that concurrent onboarding of the same
    address cannot produce two employees.
    """

    __tablename__ = "employees"
    __table_args__ = (
        UniqueConstraint("email", name="uq_employees_email"),
        CheckConstraint("role IN ('manager', 'staff')", name="ck_employees_role"),
        CheckConstraint(
            "status IN ('active', 'inactive')", name="ck_employees_status"
        ),
    )

    restaurant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("restaurants.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    role: Mapped[str] = mapped_column(String(32), nullable=False)
    position: Mapped[str | None] = mapped_column(String(255), nullable=True)
    hourly_rate: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="active")

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<EmployeeModel(id={self.id}, email={self.email})>"
