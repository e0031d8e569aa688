"""Ports (interfaces) for the Workforce bounded context."""

from workforce.ports.exceptions import (
    IdentityStoreError,
    RelationalStoreError,
    UniqueViolationError,
)
from workforce.ports.stores import IdentityStore, NotificationEmitter, RelationalStore

__all__ = [
    "IdentityStore",
    "IdentityStoreError",
    "NotificationEmitter",
    "RelationalStore",
    "RelationalStoreError",
    "UniqueViolationError",
]
