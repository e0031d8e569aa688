"""Domain-Oriented Observability for the Workforce application layer.

Probes for lifecycle flows following Domain-Oriented Observability patterns.
"""

from workforce.application.observability.lifecycle_probe import (
    DefaultLifecycleProbe,
    LifecycleProbe,
)

__all__ = [
    "LifecycleProbe",
    "DefaultLifecycleProbe",
]
