"""Application layer DI providers."""

from dishka import Scope, provide

from relay.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    FreezeCommentUseCase,
    GetCommentTreeUseCase,
    GetCommentUseCase,
    UpdateCommentUseCase,
)
from relay.application.usecase.event import (
    GetUnreadCountUseCase,
    ListEventsUseCase,
    MarkAllReadUseCase,
    MarkReadUseCase,
    PublishEventUseCase,
)
from relay.config import FanoutSettings
from relay.domain.repository import EventLogRepository
from relay.domain.service import CommentService, FanoutService, ReadLedgerService
from relay.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService, fanout_service: FanoutService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service, fanout_service=fanout_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comment_use_case(
        self, comment_service: CommentService
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comment_tree_use_case(
        self, comment_service: CommentService
    ) -> GetCommentTreeUseCase:
        """Provide get comment tree use case."""
        return GetCommentTreeUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_freeze_comment_use_case(
        self, comment_service: CommentService
    ) -> FreezeCommentUseCase:
        """Provide freeze comment use case."""
        return FreezeCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    # Event use cases
    @provide(scope=Scope.REQUEST)
    def get_publish_event_use_case(
        self, fanout_service: FanoutService
    ) -> PublishEventUseCase:
        """Provide publish event use case."""
        return PublishEventUseCase(fanout_service=fanout_service)

    @provide(scope=Scope.REQUEST)
    def get_list_events_use_case(
        self,
        event_log_repository: EventLogRepository,
        read_ledger_service: ReadLedgerService,
        fanout_settings: FanoutSettings,
    ) -> ListEventsUseCase:
        """Provide list events use case."""
        return ListEventsUseCase(
            event_log_repository=event_log_repository,
            read_ledger_service=read_ledger_service,
            fanout_settings=fanout_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_mark_read_use_case(
        self, read_ledger_service: ReadLedgerService
    ) -> MarkReadUseCase:
        """Provide mark read use case."""
        return MarkReadUseCase(read_ledger_service=read_ledger_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_all_read_use_case(
        self, read_ledger_service: ReadLedgerService
    ) -> MarkAllReadUseCase:
        """Provide mark all read use case."""
        return MarkAllReadUseCase(read_ledger_service=read_ledger_service)

    @provide(scope=Scope.REQUEST)
    def get_unread_count_use_case(
        self, read_ledger_service: ReadLedgerService
    ) -> GetUnreadCountUseCase:
        """Provide unread count use case."""
        return GetUnreadCountUseCase(read_ledger_service=read_ledger_service)
