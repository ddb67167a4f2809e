"""Test DI providers."""

# Import mock implementations to register them as subclasses
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "build_test_container",
]
