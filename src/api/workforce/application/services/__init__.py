"""Application services for the Workforce bounded context."""

from workforce.application.services.lifecycle_coordinator import LifecycleCoordinator

__all__ = [
    "LifecycleCoordinator",
]
