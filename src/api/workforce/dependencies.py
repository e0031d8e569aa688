"""FastAPI dependency providers for the Workforce bounded context.

Wires the lifecycle coordinator to its concrete stores. The identity
provider client is created once and reused; it holds an HTTP connection
pool and is closed on application shutdown.
"""

from __future__ import annotations

import secrets
import threading
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from infrastructure.database.dependencies import get_write_engine
from infrastructure.settings import (
    get_identity_settings,
    get_lifecycle_settings,
    get_settings,
)
from shared_kernel.observability_context import ObservationContext
from workforce.application.observability import DefaultLifecycleProbe, LifecycleProbe
from workforce.application.services import LifecycleCoordinator
from workforce.infrastructure.notification_emitter import RelationalNotificationEmitter
from workforce.infrastructure.sql_relational_store import SqlRelationalStore
from workforce.infrastructure.supabase_identity_store import SupabaseIdentityStore
from workforce.ports.stores import IdentityStore, NotificationEmitter, RelationalStore

# Module-level identity client (created on first use)
_identity_store: SupabaseIdentityStore | None = None
_identity_lock = threading.Lock()


def get_identity_store() -> IdentityStore:
    """Get the shared Supabase identity store (singleton).

    Uses double-check locking for thread-safe initialization.
    """
    global _identity_store
    if _identity_store is None:
        with _identity_lock:
            if _identity_store is None:
                settings = get_identity_settings()
                _identity_store = SupabaseIdentityStore(
                    base_url=settings.url,
                    service_role_key=settings.service_role_key.get_secret_value(),
                    timeout_seconds=settings.timeout_seconds,
                )
    return _identity_store


async def close_identity_store() -> None:
    """Close the shared identity client. Called on application shutdown."""
    global _identity_store
    if _identity_store is not None:
        await _identity_store.aclose()
        _identity_store = None


def get_relational_store() -> RelationalStore:
    """Get a RelationalStore on the shared write engine."""
    return SqlRelationalStore(engine=get_write_engine())


def get_notification_emitter(
    relational_store: Annotated[RelationalStore, Depends(get_relational_store)],
) -> NotificationEmitter:
    """Get the notification emitter writing to the notifications table."""
    return RelationalNotificationEmitter(relational_store=relational_store)


def get_lifecycle_probe(
    x_request_id: Annotated[str | None, Header(alias="X-Request-ID")] = None,
) -> LifecycleProbe:
    """Get LifecycleProbe instance.

    Binds the caller-supplied request ID, when present, so every lifecycle
    event of the request can be correlated.

    Returns:
        DefaultLifecycleProbe instance for observability
    """
    probe = DefaultLifecycleProbe()
    if x_request_id:
        return probe.with_context(ObservationContext(request_id=x_request_id))
    return probe


def get_lifecycle_coordinator(
    identity_store: Annotated[IdentityStore, Depends(get_identity_store)],
    relational_store: Annotated[RelationalStore, Depends(get_relational_store)],
    notifications: Annotated[NotificationEmitter, Depends(get_notification_emitter)],
    probe: Annotated[LifecycleProbe, Depends(get_lifecycle_probe)],
) -> LifecycleCoordinator:
    """Get LifecycleCoordinator instance.

    Args:
        identity_store: Identity provider client
        relational_store: Relational store (shared per request via dependency caching)
        notifications: Notification emitter
        probe: Lifecycle probe for observability

    Returns:
        LifecycleCoordinator instance
    """
    return LifecycleCoordinator(
        identity_store=identity_store,
        relational_store=relational_store,
        notifications=notifications,
        probe=probe,
        principal_deletion_concurrency=(
            get_lifecycle_settings().principal_deletion_concurrency
        ),
    )


def require_admin_key(
    x_admin_key: Annotated[str | None, Header(alias="X-Admin-Key")] = None,
) -> None:
    """Guard privileged routes with the configured admin API key.

    Privileged routes are disabled entirely when no key is configured.

    Raises:
        HTTPException: 403 if the key is unset, missing or wrong
    """
    configured = get_settings().admin_api_key
    if configured is None or not configured.get_secret_value():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Privileged operations are disabled",
        )
    if x_admin_key is None or not secrets.compare_digest(
        x_admin_key.encode(), configured.get_secret_value().encode()
    ):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid admin key",
        )
