"""Realtime delivery DI provider."""

from dishka import Scope, provide

from relay.adapter.realtime import InMemoryConnectionRegistry
from relay.domain.service import ConnectionRegistry
from relay.util.di.base import ProviderBase


class RealtimeProvider(ProviderBase):
    """Live connection registry provider.

    One registry per process: every request and socket handler sees the
    same set of connections.
    """

    @provide(scope=Scope.APP)
    def get_connection_registry(self) -> ConnectionRegistry:
        """Provide connection registry."""
        return InMemoryConnectionRegistry()
