"""Lifecycle error taxonomy for the Workforce bounded context.

Every lifecycle flow ends either with a result or with exactly one of these
exceptions. The ``kind`` attribute is stable and safe to expose to callers.
"""

from __future__ import annotations

from collections.abc import Iterable


class LifecycleError(Exception):
    """Base class for failures of a lifecycle flow."""

    kind = "lifecycle"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LifecycleError):
    """Raised when input is missing or malformed.

    Always raised before any call to the identity or relational store, so
    there is never anything to undo.
    """

    kind = "validation"

    def __init__(self, message: str, fields: Iterable[str] = ()):
        super().__init__(message)
        self.fields = tuple(fields)


class NotFoundError(LifecycleError):
    """Raised when a referenced tenant or employee does not exist."""

    kind = "not_found"


class AuthorizationError(LifecycleError):
    """Raised when the caller does not own the resource it tries to change.

    Raised before any mutation takes place.
    """

    kind = "authorization"


class UpstreamError(LifecycleError):
    """Raised when a primary call to the identity or relational store fails.

    The message is the upstream message. The original exception is kept as
    ``__cause__``.
    """

    kind = "upstream"

    def __init__(self, message: str, step: str | None = None):
        super().__init__(message)
        self.step = step


class PartialFailureError(LifecycleError):
    """Raised when a flow left state that needs manual reconciliation.

    This happens when a compensating or best-effort step fails after a
    primary mutation already succeeded, for example an orphaned principal
    after a failed onboarding rollback.

    Attributes:
        step: The sub-step whose failure produced the partial state
        principal_ids: Principals affected by the partial state
        unreverted_steps: Completed steps that could not be undone
    """

    kind = "partial_failure"

    def __init__(
        self,
        message: str,
        step: str,
        principal_ids: Iterable[str] = (),
        unreverted_steps: Iterable[str] = (),
    ):
        super().__init__(message)
        self.step = step
        self.principal_ids = tuple(principal_ids)
        self.unreverted_steps = tuple(unreverted_steps)
