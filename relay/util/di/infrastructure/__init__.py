"""Infrastructure DI providers."""

from .persistence import PersistenceProvider
from .realtime import RealtimeProvider

# Import implementations to register them as subclasses
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "RealtimeProvider",
]
