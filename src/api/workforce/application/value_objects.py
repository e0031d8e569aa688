"""Application-level value objects for lifecycle flows.

Requests arrive here unvalidated from the HTTP layer or from in-process
callers. ``OnboardingRequest.validate`` is the single place where onboarding
input is checked, and it runs before any store is contacted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from workforce.domain.exceptions import ValidationError
from workforce.domain.value_objects import (
    TENANT_FOREIGN_KEY,
    EmployeeRole,
    EmployeeStatus,
    normalize_email,
)

REQUIRED_ONBOARDING_FIELDS = (
    "email",
    "password",
    "first_name",
    "last_name",
    "role",
    "hire_date",
    "tenant_id",
)


@dataclass(frozen=True)
class OnboardingRequest:
    """Raw input for onboarding an employee.

    Every field is optional at construction time so that missing input can be
    reported as a ValidationError instead of a TypeError.
    """

    email: str | None = None
    password: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None
    hire_date: date | str | None = None
    tenant_id: str | None = None
    phone: str | None = None
    position: str | None = None
    hourly_rate: Decimal | float | int | str | None = None

    def missing_fields(self) -> tuple[str, ...]:
        """Names of required fields that are absent or blank."""
        missing = []
        for name in REQUIRED_ONBOARDING_FIELDS:
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return tuple(missing)

    def validate(self) -> NewEmployee:
        """Check the request and return the validated employee draft.

        Raises:
            ValidationError: If a required field is missing or a value is malformed
        """
        missing = self.missing_fields()
        if missing:
            raise ValidationError("Missing required fields", fields=missing)

        try:
            role = EmployeeRole(str(self.role).strip().lower())
        except ValueError as e:
            allowed = ", ".join(r.value for r in EmployeeRole)
            raise ValidationError(
                f"Invalid role '{self.role}', expected one of: {allowed}",
                fields=("role",),
            ) from e

        return NewEmployee(
            email=normalize_email(str(self.email)),
            password=str(self.password),
            first_name=str(self.first_name).strip(),
            last_name=str(self.last_name).strip(),
            role=role,
            hire_date=_parse_hire_date(self.hire_date),
            tenant_id=str(self.tenant_id).strip(),
            phone=_blank_to_none(self.phone),
            position=_blank_to_none(self.position),
            hourly_rate=_parse_hourly_rate(self.hourly_rate),
        )


@dataclass(frozen=True)
class NewEmployee:
    """A validated onboarding request, ready to be provisioned."""

    email: str
    password: str = field(repr=False)
    first_name: str
    last_name: str
    role: EmployeeRole
    hire_date: date
    tenant_id: str
    phone: str | None = None
    position: str | None = None
    hourly_rate: Decimal | None = None

    @property
    def principal_metadata(self) -> dict[str, Any]:
        """User metadata stored with the principal."""
        return {"first_name": self.first_name, "last_name": self.last_name}

    def to_record(self, principal_id: str) -> dict[str, Any]:
        """Build the `employees` row linked to the given principal."""
        return {
            "user_id": principal_id,
            TENANT_FOREIGN_KEY: self.tenant_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "role": self.role.value,
            "position": self.position,
            "hourly_rate": self.hourly_rate,
            "hire_date": self.hire_date,
            "status": EmployeeStatus.ACTIVE.value,
        }


@dataclass(frozen=True)
class OnboardingResult:
    """Outcome of a successful onboarding."""

    principal_id: str
    email: str


@dataclass(frozen=True)
class TeardownSummary:
    """Outcome of a successful tenant teardown."""

    tenant_id: str
    principals_deleted: int
    rows_deleted: dict[str, int] = field(default_factory=dict)


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_hire_date(value: date | str | None) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as e:
        raise ValidationError(
            f"Invalid hire date '{value}', expected YYYY-MM-DD",
            fields=("hire_date",),
        ) from e


def _parse_hourly_rate(value: Decimal | float | int | str | None) -> Decimal | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        rate = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValidationError(
            f"Invalid hourly rate '{value}'", fields=("hourly_rate",)
        ) from e
    if not rate.is_finite() or rate < 0:
        raise ValidationError(
            f"Invalid hourly rate '{value}'", fields=("hourly_rate",)
        )
    return rate
