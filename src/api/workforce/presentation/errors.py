"""Translation of lifecycle errors into HTTP errors."""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from workforce.domain.exceptions import (
    AuthorizationError,
    LifecycleError,
    NotFoundError,
    PartialFailureError,
    UpstreamError,
    ValidationError,
)

_STATUS_BY_ERROR: dict[type[LifecycleError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    UpstreamError: status.HTTP_502_BAD_GATEWAY,
    PartialFailureError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def to_http_exception(error: LifecycleError) -> HTTPException:
    """Map a lifecycle error to an HTTPException.

    The detail always carries ``error`` (the message) and ``kind``. Validation
    errors add the offending ``fields``; partial failures add the ``step`` and
    the ``principalIds`` that need reconciliation.
    """
    detail: dict[str, Any] = {"error": error.message, "kind": error.kind}

    if isinstance(error, ValidationError) and error.fields:
        detail["fields"] = list(error.fields)
    elif isinstance(error, PartialFailureError):
        detail["step"] = error.step
        detail["principalIds"] = list(error.principal_ids)

    status_code = next(
        (
            code
            for error_type, code in _STATUS_BY_ERROR.items()
            if isinstance(error, error_type)
        ),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    return HTTPException(status_code=status_code, detail=detail)
