"""Domain probe for Workforce store adapters.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events from the identity provider client and the
relational store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class IdentityStoreProbe(Protocol):
    """Domain probe for identity provider operations."""

    def principal_created(self, principal_id: str) -> None:
        """Record that the provider created a principal."""
        ...

    def principal_deleted(self, principal_id: str) -> None:
        """Record that the provider deleted a principal."""
        ...

    def principal_already_absent(self, principal_id: str) -> None:
        """Record that a deleted principal did not exist."""
        ...

    def request_failed(
        self, operation: str, status_code: int | None, message: str
    ) -> None:
        """Record that a provider request failed."""
        ...

    def with_context(self, context: ObservationContext) -> IdentityStoreProbe:
        """Create a new probe with observation context bound."""
        ...


class RelationalStoreProbe(Protocol):
    """Domain probe for relational store operations."""

    def rows_deleted(self, table: str, count: int) -> None:
        """Record that rows were deleted."""
        ...

    def unique_violation(self, table: str) -> None:
        """Record that an insert hit a uniqueness constraint."""
        ...

    def operation_failed(self, operation: str, table: str, error: Exception) -> None:
        """Record that a relational operation failed."""
        ...

    def with_context(self, context: ObservationContext) -> RelationalStoreProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultIdentityStoreProbe:
    """Default implementation of IdentityStoreProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultIdentityStoreProbe:
        """Create a new probe with observation context bound."""
        return DefaultIdentityStoreProbe(logger=self._logger, context=context)

    def principal_created(self, principal_id: str) -> None:
        """Record that the provider created a principal."""
        self._logger.debug(
            "identity_principal_created",
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def principal_deleted(self, principal_id: str) -> None:
        """Record that the provider deleted a principal."""
        self._logger.debug(
            "identity_principal_deleted",
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def principal_already_absent(self, principal_id: str) -> None:
        """Record that a deleted principal did not exist."""
        self._logger.info(
            "identity_principal_already_absent",
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def request_failed(
        self, operation: str, status_code: int | None, message: str
    ) -> None:
        """Record that a provider request failed."""
        self._logger.warning(
            "identity_request_failed",
            operation=operation,
            status_code=status_code,
            message=message,
            **self._get_context_kwargs(),
        )


class DefaultRelationalStoreProbe:
    """Default implementation of RelationalStoreProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultRelationalStoreProbe:
        """Create a new probe with observation context bound."""
        return DefaultRelationalStoreProbe(logger=self._logger, context=context)

    def rows_deleted(self, table: str, count: int) -> None:
        """Record that rows were deleted."""
        self._logger.debug(
            "relational_rows_deleted",
            table=table,
            count=count,
            **self._get_context_kwargs(),
        )

    def unique_violation(self, table: str) -> None:
        """Record that an insert hit a uniqueness constraint."""
        self._logger.info(
            "relational_unique_violation",
            table=table,
            **self._get_context_kwargs(),
        )

    def operation_failed(self, operation: str, table: str, error: Exception) -> None:
        """Record that a relational operation failed."""
        self._logger.error(
            "relational_operation_failed",
            operation=operation,
            table=table,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
