"""Create comment use case."""

from datetime import datetime
from uuid import UUID, uuid4

import logfire
from pydantic import BaseModel, Field

from relay.application.usecase.comment.get_comment import CommentItem
from relay.domain.model import FanoutEvent
from relay.domain.service import CommentService, FanoutService
from relay.domain.value import CommentId, EventId, EventKind, ThreadId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    thread_id: str  # UUID string
    content: str
    author_id: str  # User ID from authenticated user
    parent_id: str | None = None  # Parent comment ID for replies
    notify_user_ids: list[str] = Field(default_factory=list)
    event_kind: EventKind = EventKind.COMMENT_ADDED


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentItem
    notified: dict[str, str]  # recipient ID -> delivery status
    notification_errors: list[str]  # recipient IDs whose event was not stored


class CreateCommentUseCase:
    """Use case for creating a comment or replying to another comment.

    Optionally notifies other users (task assignees, thread participants)
    that the comment was added.
    """

    def __init__(
        self,
        comment_service: CommentService,
        fanout_service: FanoutService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            fanout_service: Fan-out service for notifications
        """
        self.comment_service = comment_service
        self.fanout_service = fanout_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Create comment via comment service (validates parent if replying)
        2. Publish a comment event to the users to notify, except the author

        Args:
            request: Create comment request

        Returns:
            Created comment and notification outcome

        Raises:
            InvalidParentError: If parent comment invalid
            ValueError: If an ID is not a valid UUID
        """
        thread_id = ThreadId(UUID(request.thread_id))
        author_id = UserId(UUID(request.author_id))
        parent_id = CommentId(UUID(request.parent_id)) if request.parent_id else None
        recipient_ids = [
            UserId(UUID(rid))
            for rid in request.notify_user_ids
            if UUID(rid) != author_id
        ]

        comment = await self.comment_service.create_comment(
            thread_id=thread_id,
            content=request.content,
            author_id=author_id,
            parent_id=parent_id,
        )

        notified: dict[str, str] = {}
        notification_errors: list[str] = []
        if recipient_ids:
            event = FanoutEvent(
                id=EventId(uuid4()),
                kind=request.event_kind,
                sender_id=author_id,
                recipient_ids=tuple(recipient_ids),
                payload={
                    "comment_id": str(comment.id),
                    "thread_id": str(comment.thread_id),
                    "parent_id": str(comment.parent_id) if comment.parent_id else None,
                    "content": comment.content,
                },
                created_at=datetime.now(),
            )
            report = await self.fanout_service.publish(event)
            notified = {str(rid): status.value for rid, status in report.statuses.items()}
            notification_errors = [str(rid) for rid in report.failed_recipients]
            if not report.ok:
                logfire.warn(
                    "Comment created but some notifications were not stored",
                    comment_id=str(comment.id),
                    failed=len(notification_errors),
                )

        return CreateCommentResponse(
            comment=CommentItem.from_domain(comment),
            notified=notified,
            notification_errors=notification_errors,
        )
