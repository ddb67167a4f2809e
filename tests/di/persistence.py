"""Mock persistence providers for testing."""

from dishka import Scope, provide

from relay.domain.repository import (
    CommentRepository,
    EventLogRepository,
    ReadLedgerRepository,
)
from relay.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryEventLogRepository,
    InMemoryEventStore,
    InMemoryReadLedgerRepository,
)
from relay.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so data survives across requests made against one
    container; each test builds its own container, which keeps tests
    isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_event_store(self) -> InMemoryEventStore:
        """Shared storage for the event log and read ledger."""
        return InMemoryEventStore()

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        return InMemoryCommentRepository()

    @provide(scope=Scope.APP)
    def get_event_log_repository(self, store: InMemoryEventStore) -> EventLogRepository:
        return InMemoryEventLogRepository(store)

    @provide(scope=Scope.APP)
    def get_read_ledger_repository(
        self, store: InMemoryEventStore
    ) -> ReadLedgerRepository:
        return InMemoryReadLedgerRepository(store)
