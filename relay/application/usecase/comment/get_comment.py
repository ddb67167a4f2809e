"""Get comment use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from relay.application.usecase.base import BaseUseCase
from relay.domain.model import Comment
from relay.domain.service import CommentService
from relay.domain.value import CommentId


class CommentItem(BaseModel):
    """Comment item in response."""

    comment_id: str
    thread_id: str
    parent_id: str | None
    author_id: str | None
    content: str
    is_frozen: bool
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentItem":
        return cls(
            comment_id=str(comment.id),
            thread_id=str(comment.thread_id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            author_id=str(comment.author_id) if comment.author_id else None,
            content=comment.content,
            is_frozen=comment.is_frozen,
            is_deleted=comment.is_deleted,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: str  # UUID string


class GetCommentUseCase(BaseUseCase):
    """Use case for fetching a single comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentRequest) -> CommentItem:
        """Execute get comment flow.

        Raises:
            NotFoundError: If comment not found
        """
        comment = await self.comment_service.get_comment(
            CommentId(UUID(request.comment_id))
        )
        return CommentItem.from_domain(comment)
