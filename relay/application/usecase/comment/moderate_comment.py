"""Freeze and delete comment use cases."""

from uuid import UUID

from pydantic import BaseModel

from relay.application.usecase.comment.get_comment import CommentItem
from relay.domain.error import NotAuthorizedError
from relay.domain.model import Comment
from relay.domain.service import CommentService
from relay.domain.value import CommentId, UserId


class FreezeCommentRequest(BaseModel):
    """Freeze comment request."""

    comment_id: str  # UUID string
    user_id: str  # Current user ID (must be author)


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    user_id: str  # Current user ID (must be author)
    hard: bool = False  # Remove the record instead of marking it deleted


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    hard: bool
    comment: CommentItem | None  # Soft-deleted record, None after a hard delete


async def _get_owned(
    comment_service: CommentService, comment_id: str, user_id: str
) -> Comment:
    comment = await comment_service.get_comment(CommentId(UUID(comment_id)))
    if comment.author_id != UserId(UUID(user_id)):
        raise NotAuthorizedError("comment", comment_id, user_id)
    return comment


class FreezeCommentUseCase:
    """Use case for freezing a comment against further edits."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: FreezeCommentRequest) -> CommentItem:
        """Execute freeze comment flow.

        Raises:
            NotFoundError: If comment not found
            NotAuthorizedError: If user doesn't own the comment
        """
        comment = await _get_owned(
            self.comment_service, request.comment_id, request.user_id
        )
        frozen = await self.comment_service.freeze(comment.id)
        return CommentItem.from_domain(frozen)


class DeleteCommentUseCase:
    """Use case for deleting a comment.

    Soft delete keeps the record so replies stay in place; hard delete
    removes it and its replies surface as top-level comments.
    """

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If comment not found
            NotAuthorizedError: If user doesn't own the comment
        """
        comment = await _get_owned(
            self.comment_service, request.comment_id, request.user_id
        )

        if request.hard:
            await self.comment_service.hard_delete(comment.id)
            return DeleteCommentResponse(
                comment_id=request.comment_id, hard=True, comment=None
            )

        deleted = await self.comment_service.soft_delete(comment.id)
        return DeleteCommentResponse(
            comment_id=request.comment_id,
            hard=False,
            comment=CommentItem.from_domain(deleted),
        )
