"""Domain-Oriented Observability for Workforce infrastructure.

Probes for store adapters following Domain-Oriented Observability patterns.
"""

from workforce.infrastructure.observability.store_probe import (
    DefaultIdentityStoreProbe,
    DefaultRelationalStoreProbe,
    IdentityStoreProbe,
    RelationalStoreProbe,
)

__all__ = [
    "IdentityStoreProbe",
    "DefaultIdentityStoreProbe",
    "RelationalStoreProbe",
    "DefaultRelationalStoreProbe",
]
