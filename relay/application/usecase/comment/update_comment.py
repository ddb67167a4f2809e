"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel

from relay.application.usecase.comment.get_comment import CommentItem
from relay.domain.error import NotAuthorizedError
from relay.domain.service import CommentService
from relay.domain.value import CommentId, UserId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    user_id: str  # Current user ID (must be author)
    content: str  # New content (required, cannot be empty)


class UpdateCommentUseCase:
    """Use case for updating a comment's content."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> CommentItem:
        """Execute update comment flow.

        Args:
            request: Comment ID, acting user ID and new content

        Returns:
            Updated comment

        Raises:
            NotFoundError: If comment not found
            NotAuthorizedError: If user doesn't own the comment
            ContentDeletedException: If comment is deleted
            CommentFrozenError: If comment is frozen
        """
        comment_id = CommentId(UUID(request.comment_id))
        user_id = UserId(UUID(request.user_id))

        comment = await self.comment_service.get_comment(comment_id)
        if comment.author_id != user_id:
            raise NotAuthorizedError("comment", request.comment_id, request.user_id)

        updated = await self.comment_service.update_content(
            comment_id, request.content
        )
        return CommentItem.from_domain(updated)
