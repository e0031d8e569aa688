"""Fixtures for Workforce unit tests.

Provides in-memory stand-ins for the identity provider, the relational
store and the notification sink. Each fake records calls and supports
fault injection so lifecycle properties can be checked end to end
without a network or database.
"""

from __future__ import annotations

import itertools
from collections.abc import Mapping
from datetime import date
from typing import Any
from unittest.mock import Mock

import pytest

from workforce.application.observability import LifecycleProbe
from workforce.application.services import LifecycleCoordinator
from workforce.application.value_objects import OnboardingRequest
from workforce.ports.exceptions import (
    IdentityStoreError,
    RelationalStoreError,
    UniqueViolationError,
)

OWNER_EMAIL = "owner@x.tt"
TENANT_ID = "T1"


class InMemoryIdentityStore:
    """IdentityStore fake keyed by principal id."""

    def __init__(self) -> None:
        self.principals: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, str]] = []
        self.create_error: Exception | None = None
        self.delete_errors: dict[str, Exception] = {}
        self.delete_error: Exception | None = None
        self._ids = (f"principal-{n}" for n in itertools.count(1))

    async def create_principal(
        self, email: str, password: str, metadata: Mapping[str, Any]
    ) -> str:
        self.calls.append(("create_principal", email))
        if self.create_error is not None:
            raise self.create_error
        if any(p["email"] == email for p in self.principals.values()):
            raise IdentityStoreError(
                "A user with this email address has already been registered",
                status_code=422,
            )
        principal_id = next(self._ids)
        self.principals[principal_id] = {"email": email, "metadata": dict(metadata)}
        return principal_id

    async def delete_principal(self, principal_id: str) -> None:
        self.calls.append(("delete_principal", principal_id))
        error = self.delete_errors.get(principal_id) or self.delete_error
        if error is not None:
            raise error
        self.principals.pop(principal_id, None)

    def emails(self) -> list[str]:
        return [p["email"] for p in self.principals.values()]


class InMemoryRelationalStore:
    """RelationalStore fake holding rows per table.

    ``fail`` maps ``(operation, table)`` to the exception that operation
    should raise, e.g. ``("insert", "employees")``.
    """

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail: dict[tuple[str, str], Exception] = {}
        self._ids = (f"row-{n}" for n in itertools.count(1))

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self.tables.setdefault(str(table), [])

    def seed(self, table: str, **row: Any) -> dict[str, Any]:
        row.setdefault("id", next(self._ids))
        self.rows(table).append(row)
        return row

    def _check(self, operation: str, table: str) -> None:
        self.calls.append((operation, str(table)))
        error = self.fail.get((operation, str(table)))
        if error is not None:
            raise error

    @staticmethod
    def _matches(row: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
        return all(row.get(column) == value for column, value in filters.items())

    async def insert(self, table: str, row: Mapping[str, Any]) -> dict[str, Any]:
        self._check("insert", table)
        if str(table) == "employees" and any(
            existing["email"] == row.get("email") for existing in self.rows(table)
        ):
            raise UniqueViolationError(
                "duplicate key value violates unique constraint on employees"
            )
        stored = {"id": next(self._ids), **row}
        self.rows(table).append(stored)
        return dict(stored)

    async def delete_where(self, table: str, filters: Mapping[str, Any]) -> int:
        self._check("delete", table)
        if not filters:
            raise RelationalStoreError("Refusing to delete without a filter")
        kept = [row for row in self.rows(table) if not self._matches(row, filters)]
        removed = len(self.rows(table)) - len(kept)
        self.tables[str(table)] = kept
        return removed

    async def find_one(
        self, table: str, filters: Mapping[str, Any]
    ) -> dict[str, Any] | None:
        self._check("find", table)
        for row in self.rows(table):
            if self._matches(row, filters):
                return dict(row)
        return None

    async def find_all(
        self, table: str, filters: Mapping[str, Any]
    ) -> list[dict[str, Any]]:
        self._check("find", table)
        return [dict(row) for row in self.rows(table) if self._matches(row, filters)]

    def mutations(self) -> list[tuple[str, str]]:
        return [call for call in self.calls if call[0] in ("insert", "delete")]


class RecordingNotificationEmitter:
    """NotificationEmitter fake recording every emitted notification."""

    def __init__(self) -> None:
        self.emitted: list[dict[str, Any]] = []
        self.error: Exception | None = None

    async def emit(
        self,
        principal_id: str,
        tenant_id: str,
        kind: str,
        fields: Mapping[str, Any],
    ) -> None:
        if self.error is not None:
            raise self.error
        self.emitted.append(
            {
                "principal_id": principal_id,
                "tenant_id": tenant_id,
                "kind": kind,
                "fields": dict(fields),
            }
        )


@pytest.fixture
def identity_store() -> InMemoryIdentityStore:
    return InMemoryIdentityStore()


@pytest.fixture
def relational_store() -> InMemoryRelationalStore:
    """Relational store seeded with tenant T1 and its owner's employee record."""
    store = InMemoryRelationalStore()
    store.seed(
        "restaurants",
        id=TENANT_ID,
        name="Doubles Corner",
        owner_email=OWNER_EMAIL,
        timezone="America/Port_of_Spain",
    )
    return store


@pytest.fixture
def notifications() -> RecordingNotificationEmitter:
    return RecordingNotificationEmitter()


@pytest.fixture
def mock_probe() -> Mock:
    """Mock LifecycleProbe."""
    return Mock(spec=LifecycleProbe)


@pytest.fixture
def coordinator(
    identity_store: InMemoryIdentityStore,
    relational_store: InMemoryRelationalStore,
    notifications: RecordingNotificationEmitter,
    mock_probe: Mock,
) -> LifecycleCoordinator:
    """Create LifecycleCoordinator wired to in-memory fakes."""
    return LifecycleCoordinator(
        identity_store=identity_store,
        relational_store=relational_store,
        notifications=notifications,
        probe=mock_probe,
    )


@pytest.fixture
def onboarding_request() -> OnboardingRequest:
    """Valid onboarding input for a staff member of T1."""
    return OnboardingRequest(
        email="a@x.tt",
        password="p",
        first_name="A",
        last_name="B",
        role="staff",
        hire_date="2024-01-01",
        tenant_id=TENANT_ID,
    )


@pytest.fixture
def seed_employee(
    identity_store: InMemoryIdentityStore,
    relational_store: InMemoryRelationalStore,
):
    """Factory seeding an employee of T1 together with its principal."""

    def _seed(email: str, role: str = "staff", with_principal: bool = True):
        principal_id = None
        if with_principal:
            principal_id = f"principal-of-{email}"
            identity_store.principals[principal_id] = {"email": email, "metadata": {}}
        return relational_store.seed(
            "employees",
            restaurant_id=TENANT_ID,
            user_id=principal_id,
            email=email,
            first_name=email.split("@")[0],
            last_name="Test",
            role=role,
            status="active",
            hire_date=date(2024, 1, 1),
        )

    return _seed
