"""Lifecycle coordinator for the Workforce bounded context.

Creates and destroys accounts that span the identity provider and the
relational store. The two stores fail independently and share no
transaction, so every flow relies on step ordering, compensation and
idempotent deletes:

- Onboarding creates the principal first and deletes it again if the
  employee row cannot be inserted.
- Offboarding deletes the principal before the employee row and stops if
  the principal cannot be deleted.
- Tenant teardown deletes principals best-effort, then every tenant-scoped
  row, and the tenant row last. Re-running it on a partially removed tenant
  is safe.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from workforce.application.observability import DefaultLifecycleProbe, LifecycleProbe
from workforce.application.sequencing import StepSequence
from workforce.application.value_objects import (
    NewEmployee,
    OnboardingRequest,
    OnboardingResult,
    TeardownSummary,
)
from workforce.domain.entities import Employee, Tenant
from workforce.domain.exceptions import (
    AuthorizationError,
    NotFoundError,
    PartialFailureError,
    UpstreamError,
    ValidationError,
)
from workforce.domain.value_objects import (
    TENANT_FOREIGN_KEY,
    TENANT_SCOPED_TABLES,
    EmployeeRole,
    NotificationKind,
    OffboardingMode,
    Table,
)
from workforce.ports.exceptions import IdentityStoreError, RelationalStoreError
from workforce.ports.stores import IdentityStore, NotificationEmitter, RelationalStore

T = TypeVar("T")

OWNER_OFFBOARDING_MESSAGE = (
    "Cannot delete account: You are the business owner. "
    "Please transfer ownership or delete the business first."
)


class LifecycleCoordinator:
    """Application service orchestrating onboarding, offboarding and teardown.

    Stateless: every collaborator is injected, and nothing is shared between
    invocations. Each public method returns a result or raises exactly one
    ``LifecycleError`` subclass.
    """

    def __init__(
        self,
        identity_store: IdentityStore,
        relational_store: RelationalStore,
        notifications: NotificationEmitter,
        probe: LifecycleProbe | None = None,
        principal_deletion_concurrency: int = 4,
    ):
        """Initialize LifecycleCoordinator with dependencies.

        Args:
            identity_store: Identity provider holding principals
            relational_store: Relational store holding tenants and employees
            notifications: Best-effort notification sink
            probe: Optional domain probe for observability
            principal_deletion_concurrency: Maximum principal deletions in
                flight during tenant teardown (1 deletes sequentially)
        """
        if principal_deletion_concurrency < 1:
            raise ValueError("principal_deletion_concurrency must be >= 1")

        self._identity = identity_store
        self._relational = relational_store
        self._notifications = notifications
        self._probe = probe or DefaultLifecycleProbe()
        self._principal_deletion_concurrency = principal_deletion_concurrency

    async def onboard(self, request: OnboardingRequest) -> OnboardingResult:
        """Create a principal and its linked employee record.

        Args:
            request: Onboarding input; validated before any remote call

        Returns:
            OnboardingResult with the new principal id and email

        Raises:
            ValidationError: If required fields are missing or malformed
            UpstreamError: If either store rejected the request; no principal
                remains
            PartialFailureError: If the employee insert failed and the
                principal could not be deleted again (orphaned principal)
        """
        try:
            employee = request.validate()
        except ValidationError as e:
            self._probe.onboarding_rejected(reason=e.message, fields=e.fields)
            raise

        sequence = StepSequence(flow="onboard", probe=self._probe)

        principal_id = await sequence.run(
            "create_principal",
            lambda: self._identity.create_principal(
                email=employee.email,
                password=employee.password,
                metadata=employee.principal_metadata,
            ),
            compensate=self._identity.delete_principal,
            principal_of=lambda created: created,
        )
        self._probe.principal_created(
            principal_id=principal_id, tenant_id=employee.tenant_id
        )

        await sequence.run(
            "insert_employee",
            lambda: self._relational.insert(
                Table.EMPLOYEES, employee.to_record(principal_id)
            ),
        )

        await self._send_welcome(principal_id, employee)

        self._probe.employee_onboarded(
            principal_id=principal_id,
            tenant_id=employee.tenant_id,
            role=employee.role.value,
        )
        return OnboardingResult(principal_id=principal_id, email=employee.email)

    async def offboard(
        self,
        employee_id: str,
        principal_id: str | None = None,
        mode: OffboardingMode = OffboardingMode.SELF_SERVICE,
    ) -> None:
        """Remove an employee and its linked principal.

        The principal is deleted before the employee row. If the principal
        cannot be deleted, nothing is removed.

        Args:
            employee_id: Employee to remove
            principal_id: Principal to delete. Defaults to the principal linked
                to the employee record. In self-service mode it must match
                the linked principal.
            mode: PRIVILEGED skips the ownership check

        Raises:
            ValidationError: If employee_id is blank, or a self-service caller
                names a principal not linked to the employee
            NotFoundError: If the employee does not exist, or its row was
                already gone when the delete ran
            AuthorizationError: If a self-service caller targets the tenant owner
            UpstreamError: If a lookup or the principal deletion failed
            PartialFailureError: If the principal was deleted but the employee
                row could not be
        """
        if not employee_id or not employee_id.strip():
            raise ValidationError("Employee ID is required", fields=("employee_id",))

        employee = await self._get_employee(employee_id.strip())

        if mode is OffboardingMode.SELF_SERVICE:
            await self._ensure_not_owner(employee)
            if principal_id and principal_id != employee.principal_id:
                raise ValidationError(
                    "User ID does not belong to this employee",
                    fields=("principal_id",),
                )

        target_principal = principal_id or employee.principal_id
        sequence = StepSequence(flow="offboard", probe=self._probe)

        if target_principal:
            await sequence.run(
                "delete_principal",
                lambda: self._identity.delete_principal(target_principal),
                principal_of=lambda _: target_principal,
            )

        removed = await sequence.run(
            "delete_employee",
            lambda: self._relational.delete_where(Table.EMPLOYEES, {"id": employee.id}),
        )
        if removed == 0:
            # A concurrent offboarding removed the row first.
            self._probe.employee_not_found(employee_id=employee.id)
            raise NotFoundError("Employee not found")

        self._probe.employee_offboarded(
            employee_id=employee.id,
            principal_id=target_principal,
            mode=mode.value,
        )

    async def teardown_tenant(
        self, tenant_id: str, requesting_owner_email: str
    ) -> TeardownSummary:
        """Irreversibly remove a tenant and everything scoped to it.

        Teardown is a forward-only bulk operation, not a transaction: earlier
        deletions are never rolled back, and calling it again on a partially
        removed tenant finishes the job.

        Cascade order:
        1. Principals of all employees (best-effort, failures collected)
        2. Tenant-scoped dependent rows, then employees
        3. The tenant row itself

        Args:
            tenant_id: Tenant to remove
            requesting_owner_email: Must match the tenant's owner email

        Returns:
            TeardownSummary with deletion counts

        Raises:
            ValidationError: If an argument is blank
            NotFoundError: If the tenant does not exist (including a second
                teardown of the same tenant)
            AuthorizationError: If the requester is not the owner
            UpstreamError: If a relational step failed; the tenant row remains
                whenever a dependent delete failed
            PartialFailureError: If the tenant was removed but some principals
                could not be deleted
        """
        missing = [
            name
            for name, value in (
                ("tenant_id", tenant_id),
                ("requesting_owner_email", requesting_owner_email),
            )
            if not value or not value.strip()
        ]
        if missing:
            raise ValidationError(
                "Restaurant ID and owner email are required", fields=missing
            )

        tenant = await self._get_tenant(tenant_id.strip())

        if not tenant.is_owned_by(requesting_owner_email):
            self._probe.teardown_unauthorized(tenant_id=tenant.id)
            raise AuthorizationError(
                "You are not authorized to delete this restaurant"
            )

        records = await self._relational_step(
            "teardown",
            "list_employees",
            self._relational.find_all(Table.EMPLOYEES, {TENANT_FOREIGN_KEY: tenant.id}),
        )
        principal_ids = list(
            dict.fromkeys(
                str(record["user_id"]) for record in records if record.get("user_id")
            )
        )
        self._probe.tenant_teardown_started(
            tenant_id=tenant.id,
            employees_count=len(records),
            principals_count=len(principal_ids),
        )

        failed_principals = await self._delete_principals(tenant.id, principal_ids)

        rows_deleted: dict[str, int] = {}
        for table in TENANT_SCOPED_TABLES:
            count = await self._relational_step(
                "teardown",
                f"delete_{table.value}",
                self._relational.delete_where(table, {TENANT_FOREIGN_KEY: tenant.id}),
            )
            rows_deleted[table.value] = count
            self._probe.tenant_records_deleted(
                tenant_id=tenant.id, table=table.value, count=count
            )

        removed = await self._relational_step(
            "teardown",
            "delete_tenant",
            self._relational.delete_where(Table.RESTAURANTS, {"id": tenant.id}),
        )
        if removed == 0:
            # A concurrent teardown removed the row first.
            self._probe.tenant_not_found(tenant_id=tenant.id)
            raise NotFoundError("Restaurant not found")
        rows_deleted[Table.RESTAURANTS.value] = removed

        principals_deleted = len(principal_ids) - len(failed_principals)
        self._probe.tenant_torn_down(
            tenant_id=tenant.id,
            principals_deleted=principals_deleted,
            principals_failed=len(failed_principals),
        )

        if failed_principals:
            raise PartialFailureError(
                f"Restaurant deleted but {len(failed_principals)} user account(s) "
                "could not be deleted",
                step="delete_principal",
                principal_ids=failed_principals,
                unreverted_steps=("delete_principal",),
            )

        return TeardownSummary(
            tenant_id=tenant.id,
            principals_deleted=principals_deleted,
            rows_deleted=rows_deleted,
        )

    async def _send_welcome(self, principal_id: str, employee: NewEmployee) -> None:
        """Emit the welcome notification. Never raises."""
        if employee.role is EmployeeRole.MANAGER:
            return

        try:
            record = await self._relational.find_one(
                Table.RESTAURANTS, {"id": employee.tenant_id}
            )
            if record is None:
                return
            tenant = Tenant.from_record(record)
            await self._notifications.emit(
                principal_id=principal_id,
                tenant_id=tenant.id,
                kind=NotificationKind.WELCOME.value,
                fields={"tenant_name": tenant.name, "first_name": employee.first_name},
            )
        except Exception as e:
            self._probe.welcome_notification_failed(
                principal_id=principal_id, tenant_id=employee.tenant_id, error=e
            )

    async def _delete_principals(
        self, tenant_id: str, principal_ids: list[str]
    ) -> list[str]:
        """Delete principals concurrently and return the ids that failed.

        One unreachable principal must not block the rest of the teardown, so
        failures are logged and collected rather than raised.
        """
        semaphore = asyncio.Semaphore(self._principal_deletion_concurrency)

        async def delete(principal_id: str) -> str | None:
            async with semaphore:
                try:
                    await self._identity.delete_principal(principal_id)
                except IdentityStoreError as e:
                    self._probe.principal_deletion_failed(
                        tenant_id=tenant_id, principal_id=principal_id, error=e
                    )
                    return principal_id
            return None

        results = await asyncio.gather(*(delete(pid) for pid in principal_ids))
        return [pid for pid in results if pid is not None]

    async def _get_employee(self, employee_id: str) -> Employee:
        record = await self._relational_step(
            "offboard",
            "find_employee",
            self._relational.find_one(Table.EMPLOYEES, {"id": employee_id}),
        )
        if record is None:
            self._probe.employee_not_found(employee_id=employee_id)
            raise NotFoundError("Employee not found")
        return Employee.from_record(record)

    async def _get_tenant(self, tenant_id: str) -> Tenant:
        record = await self._relational_step(
            "teardown",
            "find_tenant",
            self._relational.find_one(Table.RESTAURANTS, {"id": tenant_id}),
        )
        if record is None:
            self._probe.tenant_not_found(tenant_id=tenant_id)
            raise NotFoundError("Restaurant not found")
        return Tenant.from_record(record)

    async def _ensure_not_owner(self, employee: Employee) -> None:
        """Refuse to self-remove the employee who owns the tenant."""
        record = await self._relational_step(
            "offboard",
            "find_tenant",
            self._relational.find_one(Table.RESTAURANTS, {"id": employee.tenant_id}),
        )
        if record is not None and Tenant.from_record(record).is_owned_by(employee.email):
            self._probe.ownership_violation(
                employee_id=employee.id, tenant_id=employee.tenant_id
            )
            raise AuthorizationError(OWNER_OFFBOARDING_MESSAGE)

    async def _relational_step(self, flow: str, step: str, call: Awaitable[T]) -> T:
        """Await a relational call that has nothing to undo on failure."""
        try:
            return await call
        except RelationalStoreError as e:
            self._probe.step_failed(flow=flow, step=step, error=e)
            raise UpstreamError(str(e), step=step) from e
