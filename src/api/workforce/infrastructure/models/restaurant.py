"""SQLAlchemy ORM model for the restaurants table.

Restaurants are the tenants of the system and the top-level isolation
boundary for employees and schedule data.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, CreatedAtMixin, IdMixin


class RestaurantModel(Base, IdMixin, CreatedAtMixin):
    """ORM model for restaurants table.

    The owner is identified by email; the employee with the same email is
    the owner's own employee record.
    """

    __tablename__ = "restaurants"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    timezone: Mapped[str] = mapped_column(
        String(64), nullable=False, default="America/Port_of_Spain"
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<RestaurantModel(id={self.id}, name={self.name})>"
