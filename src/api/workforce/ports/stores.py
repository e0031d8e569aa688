"""Store protocols (ports) for the Workforce bounded context.

The lifecycle coordinator talks to two independently failing stores, the
identity provider and the relational database, plus a best-effort
notification sink. Implementations live in ``workforce.infrastructure``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

Record = dict[str, Any]
Filters = Mapping[str, Any]


@runtime_checkable
class IdentityStore(Protocol):
    """Identity provider holding principals (credential-bearing accounts)."""

    async def create_principal(
        self,
        email: str,
        password: str,
        metadata: Mapping[str, Any],
    ) -> str:
        """Create a pre-confirmed principal.

        Args:
            email: Login email of the principal
            password: Initial password
            metadata: User metadata stored alongside the principal

        Returns:
            The provider-assigned principal id

        Raises:
            IdentityStoreError: If the provider rejects the request
        """
        ...

    async def delete_principal(self, principal_id: str) -> None:
        """Delete a principal if it exists.

        Deleting a principal that does not exist succeeds, so retries are safe.

        Raises:
            IdentityStoreError: If the provider fails the request
        """
        ...


@runtime_checkable
class RelationalStore(Protocol):
    """Generic table access with equality filters.

    Each call runs in its own transaction. There is no transaction spanning
    several calls.
    """

    async def insert(self, table: str, row: Mapping[str, Any]) -> Record:
        """Insert a row and return it as stored.

        Raises:
            UniqueViolationError: If the row violates a uniqueness constraint
            RelationalStoreError: For any other failure
        """
        ...

    async def delete_where(self, table: str, filters: Filters) -> int:
        """Delete rows matching all filters.

        Returns:
            Number of rows deleted (zero when nothing matched)

        Raises:
            RelationalStoreError: If the delete fails
        """
        ...

    async def find_one(self, table: str, filters: Filters) -> Record | None:
        """Return the single row matching all filters, or None.

        Raises:
            RelationalStoreError: If the query fails
        """
        ...

    async def find_all(self, table: str, filters: Filters) -> list[Record]:
        """Return every row matching all filters.

        Raises:
            RelationalStoreError: If the query fails
        """
        ...


@runtime_checkable
class NotificationEmitter(Protocol):
    """Sink for in-app notifications. Callers treat it as fire-and-forget."""

    async def emit(
        self,
        principal_id: str,
        tenant_id: str,
        kind: str,
        fields: Mapping[str, Any],
    ) -> None:
        """Emit a notification of the given kind to a principal."""
        ...
