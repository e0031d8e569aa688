"""Exceptions raised by Workforce store adapters.

Adapters translate driver and transport failures into these types. The
application layer catches them and maps them onto the lifecycle error
taxonomy; they never cross the application boundary.
"""


class IdentityStoreError(Exception):
    """Raised when the identity provider rejects or fails a request.

    The message is the provider's own error message where one is available.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RelationalStoreError(Exception):
    """Raised when a relational store operation fails."""

    pass


class UniqueViolationError(RelationalStoreError):
    """Raised when an insert violates a uniqueness constraint.

    Concurrent onboarding of the same email races at the employees insert;
    the unique constraint decides the winner and the loser sees this error.
    """

    pass
