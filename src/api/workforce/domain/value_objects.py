"""Value objects for the Workforce domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for roles, statuses and the persisted table layout.
"""

from __future__ import annotations

from enum import StrEnum


class EmployeeRole(StrEnum):
    """Role of an employee within a tenant."""

    MANAGER = "manager"
    STAFF = "staff"


class EmployeeStatus(StrEnum):
    """Employment status of an employee."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class OffboardingMode(StrEnum):
    """How an employee removal is authorized.

    PRIVILEGED skips the ownership check and is meant for administrators.
    SELF_SERVICE refuses to remove the employee who owns the tenant.
    """

    PRIVILEGED = "privileged"
    SELF_SERVICE = "self_service"


class NotificationKind(StrEnum):
    """Kinds of in-app notifications the lifecycle flows may emit."""

    WELCOME = "welcome"


class Table(StrEnum):
    """Relational tables touched by the lifecycle flows."""

    RESTAURANTS = "restaurants"
    EMPLOYEES = "employees"
    SHIFTS = "shifts"
    BUSINESS_HOURS = "business_hours"
    STAFFING_REQUIREMENTS = "staffing_requirements"
    BLOCKED_DATES = "blocked_dates"
    SHIFT_TEMPLATES = "shift_templates"
    TIME_OFF_REQUESTS = "time_off_requests"
    SHIFT_SWAP_REQUESTS = "shift_swap_requests"
    NOTIFICATIONS = "notifications"


# Column every tenant-scoped table uses to reference its tenant.
TENANT_FOREIGN_KEY = "restaurant_id"

# Tenant-scoped records removed during teardown. Rows referencing other
# tenant-scoped rows come first so the sequence also satisfies RESTRICT
# foreign keys; employees are always removed after their dependents.
TENANT_SCOPED_TABLES: tuple[Table, ...] = (
    Table.SHIFT_SWAP_REQUESTS,
    Table.TIME_OFF_REQUESTS,
    Table.SHIFTS,
    Table.SHIFT_TEMPLATES,
    Table.BLOCKED_DATES,
    Table.STAFFING_REQUIREMENTS,
    Table.BUSINESS_HOURS,
    Table.NOTIFICATIONS,
    Table.EMPLOYEES,
)


def normalize_email(email: str) -> str:
    """Normalize an email address for identity comparisons."""
    return email.strip().casefold()
