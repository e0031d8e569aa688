"""Observation context for domain-oriented observability.

Observation contexts carry request-scoped metadata that every probe adds to
the events it emits, following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable request-scoped metadata for observability.

    Domain identifiers such as tenant or employee ids are not part of the
    context: probes already pass them explicitly with each event.

    Attributes:
        request_id: Caller-supplied identifier of the current request.
        user_id: Principal performing the operation (if known).
        extra: Additional request metadata. Keys must not clash with the
            keyword arguments of probe events.

    Example:
        context = ObservationContext(request_id="req-123")
        probe = DefaultLifecycleProbe().with_context(context)
    """

    request_id: str | None = None
    user_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.user_id is not None:
            result["user_id"] = self.user_id
        result.update(self.extra)
        return result
