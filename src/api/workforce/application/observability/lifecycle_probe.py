"""Protocol for lifecycle coordinator observability.

Defines the interface for domain probes that capture application-level
domain events for onboarding, offboarding and tenant teardown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class LifecycleProbe(Protocol):
    """Domain probe for tenant and employee lifecycle operations."""

    def onboarding_rejected(self, reason: str, fields: tuple[str, ...]) -> None:
        """Record that an onboarding request failed validation."""
        ...

    def principal_created(self, principal_id: str, tenant_id: str) -> None:
        """Record that a principal was created in the identity store."""
        ...

    def employee_onboarded(
        self, principal_id: str, tenant_id: str, role: str
    ) -> None:
        """Record that an employee and its principal were created and linked."""
        ...

    def welcome_notification_failed(
        self, principal_id: str, tenant_id: str, error: Exception
    ) -> None:
        """Record that the best-effort welcome notification failed."""
        ...

    def step_failed(self, flow: str, step: str, error: Exception) -> None:
        """Record that a step of a lifecycle flow failed."""
        ...

    def step_compensated(self, flow: str, step: str) -> None:
        """Record that a completed step was undone after a later failure."""
        ...

    def compensation_failed(
        self,
        flow: str,
        step: str,
        principal_ids: tuple[str, ...],
        error: Exception,
    ) -> None:
        """Record that undoing a step failed, leaving state to reconcile."""
        ...

    def employee_not_found(self, employee_id: str) -> None:
        """Record that an employee was not found."""
        ...

    def ownership_violation(self, employee_id: str, tenant_id: str) -> None:
        """Record an attempt to self-remove the tenant owner."""
        ...

    def employee_offboarded(
        self, employee_id: str, principal_id: str | None, mode: str
    ) -> None:
        """Record that an employee and its principal were removed."""
        ...

    def tenant_not_found(self, tenant_id: str) -> None:
        """Record that a tenant was not found."""
        ...

    def teardown_unauthorized(self, tenant_id: str) -> None:
        """Record a teardown request from someone other than the owner."""
        ...

    def tenant_teardown_started(
        self, tenant_id: str, employees_count: int, principals_count: int
    ) -> None:
        """Record the scope of a tenant teardown before deletions begin."""
        ...

    def principal_deletion_failed(
        self, tenant_id: str, principal_id: str, error: Exception
    ) -> None:
        """Record that a principal could not be deleted during teardown."""
        ...

    def tenant_records_deleted(self, tenant_id: str, table: str, count: int) -> None:
        """Record how many rows of a tenant-scoped table were deleted."""
        ...

    def tenant_torn_down(
        self, tenant_id: str, principals_deleted: int, principals_failed: int
    ) -> None:
        """Record that a tenant row and its dependents were removed."""
        ...

    def with_context(self, context: ObservationContext) -> LifecycleProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultLifecycleProbe:
    """Default implementation of LifecycleProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultLifecycleProbe:
        """Create a new probe with observation context bound."""
        return DefaultLifecycleProbe(logger=self._logger, context=context)

    def onboarding_rejected(self, reason: str, fields: tuple[str, ...]) -> None:
        self._logger.info(
            "onboarding_rejected",
            reason=reason,
            fields=list(fields),
            **self._get_context_kwargs(),
        )

    def principal_created(self, principal_id: str, tenant_id: str) -> None:
        self._logger.debug(
            "principal_created",
            principal_id=principal_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def employee_onboarded(
        self, principal_id: str, tenant_id: str, role: str
    ) -> None:
        self._logger.info(
            "employee_onboarded",
            principal_id=principal_id,
            tenant_id=tenant_id,
            role=role,
            **self._get_context_kwargs(),
        )

    def welcome_notification_failed(
        self, principal_id: str, tenant_id: str, error: Exception
    ) -> None:
        self._logger.warning(
            "welcome_notification_failed",
            principal_id=principal_id,
            tenant_id=tenant_id,
            error=str(error),
            **self._get_context_kwargs(),
        )

    def step_failed(self, flow: str, step: str, error: Exception) -> None:
        self._logger.warning(
            "lifecycle_step_failed",
            flow=flow,
            step=step,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def step_compensated(self, flow: str, step: str) -> None:
        self._logger.info(
            "lifecycle_step_compensated",
            flow=flow,
            step=step,
            **self._get_context_kwargs(),
        )

    def compensation_failed(
        self,
        flow: str,
        step: str,
        principal_ids: tuple[str, ...],
        error: Exception,
    ) -> None:
        """Logged at error level: operators must reconcile these principals."""
        self._logger.error(
            "lifecycle_compensation_failed",
            flow=flow,
            step=step,
            principal_ids=list(principal_ids),
            error=str(error),
            **self._get_context_kwargs(),
        )

    def employee_not_found(self, employee_id: str) -> None:
        self._logger.debug(
            "employee_not_found",
            employee_id=employee_id,
            **self._get_context_kwargs(),
        )

    def ownership_violation(self, employee_id: str, tenant_id: str) -> None:
        self._logger.warning(
            "owner_offboarding_refused",
            employee_id=employee_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def employee_offboarded(
        self, employee_id: str, principal_id: str | None, mode: str
    ) -> None:
        self._logger.info(
            "employee_offboarded",
            employee_id=employee_id,
            principal_id=principal_id,
            mode=mode,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, tenant_id: str) -> None:
        self._logger.debug(
            "tenant_not_found",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def teardown_unauthorized(self, tenant_id: str) -> None:
        self._logger.warning(
            "tenant_teardown_unauthorized",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_teardown_started(
        self, tenant_id: str, employees_count: int, principals_count: int
    ) -> None:
        self._logger.info(
            "tenant_teardown_started",
            tenant_id=tenant_id,
            employees_count=employees_count,
            principals_count=principals_count,
            **self._get_context_kwargs(),
        )

    def principal_deletion_failed(
        self, tenant_id: str, principal_id: str, error: Exception
    ) -> None:
        self._logger.error(
            "principal_deletion_failed",
            tenant_id=tenant_id,
            principal_id=principal_id,
            error=str(error),
            **self._get_context_kwargs(),
        )

    def tenant_records_deleted(self, tenant_id: str, table: str, count: int) -> None:
        self._logger.debug(
            "tenant_records_deleted",
            tenant_id=tenant_id,
            table=table,
            count=count,
            **self._get_context_kwargs(),
        )

    def tenant_torn_down(
        self, tenant_id: str, principals_deleted: int, principals_failed: int
    ) -> None:
        self._logger.info(
            "tenant_torn_down",
            tenant_id=tenant_id,
            principals_deleted=principals_deleted,
            principals_failed=principals_failed,
            **self._get_context_kwargs(),
        )
