"""Entities for the Workforce domain.

Entities are reconstituted from relational records. They carry the small
amount of behaviour the lifecycle flows need, such as ownership checks.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from workforce.domain.value_objects import (
    TENANT_FOREIGN_KEY,
    EmployeeRole,
    EmployeeStatus,
    normalize_email,
)

DEFAULT_TIMEZONE = "America/Port_of_Spain"


@dataclass(frozen=True)
class Tenant:
    """A business (restaurant) owning employees and schedule data."""

    id: str
    name: str
    owner_email: str
    timezone: str = DEFAULT_TIMEZONE

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Tenant:
        """Build a Tenant from a `restaurants` row."""
        return cls(
            id=str(record["id"]),
            name=record.get("name") or "",
            owner_email=record.get("owner_email") or "",
            timezone=record.get("timezone") or DEFAULT_TIMEZONE,
        )

    def is_owned_by(self, email: str | None) -> bool:
        """Check whether the given email is the tenant owner's email."""
        if not email or not self.owner_email:
            return False
        return normalize_email(email) == normalize_email(self.owner_email)


@dataclass(frozen=True)
class Employee:
    """A tenant-scoped worker, optionally linked to a principal."""

    id: str
    tenant_id: str
    email: str
    first_name: str
    last_name: str
    role: EmployeeRole
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    principal_id: str | None = None
    phone: str | None = None
    position: str | None = None
    hourly_rate: Decimal | None = None
    hire_date: date | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Employee:
        """Build an Employee from an `employees` row."""
        principal_id = record.get("user_id")
        hourly_rate = record.get("hourly_rate")
        return cls(
            id=str(record["id"]),
            tenant_id=str(record[TENANT_FOREIGN_KEY]),
            email=record.get("email") or "",
            first_name=record.get("first_name") or "",
            last_name=record.get("last_name") or "",
            role=EmployeeRole(record.get("role") or EmployeeRole.STAFF),
            status=EmployeeStatus(record.get("status") or EmployeeStatus.ACTIVE),
            principal_id=str(principal_id) if principal_id else None,
            phone=record.get("phone"),
            position=record.get("position"),
            hourly_rate=Decimal(str(hourly_rate)) if hourly_rate is not None else None,
            hire_date=record.get("hire_date"),
        )

    @property
    def full_name(self) -> str:
        """First and last name joined for display."""
        return f"{self.first_name} {self.last_name}".strip()
