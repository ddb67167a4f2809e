"""Domain layer DI providers."""

from dishka import Scope, provide

from relay.config import AuthSettings, FanoutSettings
from relay.domain.repository import (
    CommentRepository,
    EventLogRepository,
    ReadLedgerRepository,
)
from relay.domain.service import (
    CommentService,
    ConnectionRegistry,
    FanoutService,
    JWTService,
    ReadLedgerService,
)
from relay.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    The connection registry they push through is APP-scoped and shared.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_fanout_service(
        self,
        event_log_repository: EventLogRepository,
        connection_registry: ConnectionRegistry,
        fanout_settings: FanoutSettings,
    ) -> FanoutService:
        """Provide fan-out service."""
        return FanoutService(
            event_log_repository=event_log_repository,
            connection_registry=connection_registry,
            live_send_timeout=fanout_settings.live_send_timeout_seconds,
        )

    @provide
    def get_read_ledger_service(
        self,
        read_ledger_repository: ReadLedgerRepository,
        event_log_repository: EventLogRepository,
        connection_registry: ConnectionRegistry,
        fanout_settings: FanoutSettings,
    ) -> ReadLedgerService:
        """Provide read ledger service."""
        return ReadLedgerService(
            read_ledger_repository=read_ledger_repository,
            event_log_repository=event_log_repository,
            connection_registry=connection_registry,
            live_send_timeout=fanout_settings.live_send_timeout_seconds,
        )
