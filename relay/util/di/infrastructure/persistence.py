"""Persistence DI providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from relay.config import Settings
from relay.domain.repository import (
    CommentRepository,
    EventLogRepository,
    ReadLedgerRepository,
)
from relay.persistence.database import create_engine, create_session_factory
from relay.persistence.repository import (
    PostgresCommentRepository,
    PostgresEventLogRepository,
    PostgresReadLedgerRepository,
)
from relay.util.di.base import ProviderBase
from relay.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Base persistence provider."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request and rolled
        back if the request raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_event_log_repository(
        self,
        session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> EventLogRepository:
        """Provide event log repository."""
        return PostgresEventLogRepository(session, session_factory)

    @provide(scope=Scope.REQUEST)
    def get_read_ledger_repository(
        self, session: AsyncSession
    ) -> ReadLedgerRepository:
        """Provide read ledger repository."""
        return PostgresReadLedgerRepository(session)
