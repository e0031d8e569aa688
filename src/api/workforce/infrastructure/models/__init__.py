"""SQLAlchemy ORM models for the Workforce bounded context.

These models map to database tables. The relational store issues Core
statements against their tables; the Alembic migration mirrors them.
"""

from workforce.infrastructure.models.employee import EmployeeModel
from workforce.infrastructure.models.notification import NotificationModel
from workforce.infrastructure.models.restaurant import RestaurantModel
from workforce.infrastructure.models.scheduling import (
    BlockedDateModel,
    BusinessHoursModel,
    ShiftModel,
    ShiftSwapRequestModel,
    ShiftTemplateModel,
    StaffingRequirementModel,
    TimeOffRequestModel,
)

__all__ = [
    "BlockedDateModel",
    "BusinessHoursModel",
    "EmployeeModel",
    "NotificationModel",
    "RestaurantModel",
    "ShiftModel",
    "ShiftSwapRequestModel",
    "ShiftTemplateModel",
    "StaffingRequirementModel",
    "TimeOffRequestModel",
]
