"""Get comment tree use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from relay.application.usecase.base import BaseUseCase
from relay.domain.service import CommentNode, CommentService, count_nodes
from relay.domain.value import ThreadId


class CommentNodeResponse(BaseModel):
    """Comment tree node for API response.

    Recursive structure mirroring the domain tree. Deleted comments keep
    their place so replies stay attached, but their content is withheld.
    """

    comment_id: str
    parent_id: str | None
    author_id: str | None
    content: str | None
    is_frozen: bool
    is_deleted: bool
    created_at: datetime
    updated_at: datetime
    replies: list["CommentNodeResponse"]

    @classmethod
    def from_domain(cls, node: CommentNode) -> "CommentNodeResponse":
        """Convert domain CommentNode to response model.

        Args:
            node: Domain comment node

        Returns:
            API response model with replies recursively converted
        """
        comment = node.comment
        return cls(
            comment_id=str(comment.id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            author_id=str(comment.author_id) if comment.author_id else None,
            content=None if comment.is_deleted else comment.content,
            is_frozen=comment.is_frozen,
            is_deleted=comment.is_deleted,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            replies=[cls.from_domain(reply) for reply in node.replies],
        )


class GetCommentTreeRequest(BaseModel):
    """Get comment tree request."""

    thread_id: str  # UUID string
    include_deleted: bool = True


class GetCommentTreeResponse(BaseModel):
    """Get comment tree response."""

    thread_id: str
    roots: list[CommentNodeResponse]
    total: int


class GetCommentTreeUseCase(BaseUseCase):
    """Use case for getting the reply tree of a thread.

    Returns top-level comments in creation order, each with its replies
    nested in creation order.
    """

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comment tree use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentTreeRequest) -> GetCommentTreeResponse:
        """Execute get comment tree flow.

        Args:
            request: Thread ID and whether to keep deleted comments

        Returns:
            Comment forest with total comment count
        """
        thread_id = ThreadId(UUID(request.thread_id))

        roots = await self.comment_service.get_thread_tree(
            thread_id, include_deleted=request.include_deleted
        )

        return GetCommentTreeResponse(
            thread_id=request.thread_id,
            roots=[CommentNodeResponse.from_domain(root) for root in roots],
            total=count_nodes(roots),
        )
