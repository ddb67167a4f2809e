"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, HTTPException, Query, Response, status
from pydantic import BaseModel, Field

from relay.application.usecase.comment import (
    CommentItem,
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    FreezeCommentRequest,
    FreezeCommentUseCase,
    GetCommentRequest,
    GetCommentTreeRequest,
    GetCommentTreeResponse,
    GetCommentTreeUseCase,
    GetCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from relay.domain.error import (
    CommentFrozenError,
    ContentDeletedException,
    InvalidParentError,
    NotAuthorizedError,
    NotFoundError,
)
from relay.domain.model.comment import MAX_CONTENT_LENGTH
from relay.domain.service import JWTService
from relay.interface.api.auth import require_user_id

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)
    parent_id: str | None = None  # Parent comment ID for replies
    notify_user_ids: list[str] = Field(default_factory=list)


class UpdateCommentAPIRequest(BaseModel):
    """API request for updating a comment."""

    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)


@router.get(
    "/threads/{thread_id}/comments/tree", response_model=GetCommentTreeResponse
)
async def get_comment_tree(
    thread_id: str,
    get_comment_tree_use_case: FromDishka[GetCommentTreeUseCase],
    include_deleted: bool = Query(default=True),
) -> GetCommentTreeResponse:
    """Get the comments of a thread as a reply tree.

    Public endpoint. Deleted comments keep their place with content
    redacted, so their replies are not orphaned.
    """
    try:
        return await get_comment_tree_use_case.execute(
            GetCommentTreeRequest(thread_id=thread_id, include_deleted=include_deleted)
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post(
    "/threads/{thread_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={207: {"model": CreateCommentResponse}},
)
async def create_comment(
    thread_id: str,
    request: CreateCommentAPIRequest,
    response: Response,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CreateCommentResponse:
    """Create a comment in a thread or reply to another comment.

    Requires authentication. Users listed in ``notify_user_ids`` get a
    ``comment_added`` event. Answers 207 when the comment was saved but
    the notification could not be stored for some of them.

    Raises:
        HTTPException: If not authenticated or validation fails
    """
    user_id = require_user_id(
        jwt_service, auth_token, authorization, "create comments"
    )

    try:
        use_case_request = CreateCommentRequest(
            thread_id=thread_id,
            content=request.content,
            author_id=user_id,
            parent_id=request.parent_id,
            notify_user_ids=request.notify_user_ids,
        )
        result = await create_comment_use_case.execute(use_case_request)
    except InvalidParentError as e:
        logfire.warn("Comment creation failed - invalid parent", error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if result.notification_errors:
        logfire.warn(
            "Comment notification partially stored",
            comment_id=result.comment.comment_id,
            failed=len(result.notification_errors),
        )
        response.status_code = status.HTTP_207_MULTI_STATUS
    return result


@router.get("/comments/{comment_id}", response_model=CommentItem)
async def get_comment(
    comment_id: str,
    get_comment_use_case: FromDishka[GetCommentUseCase],
) -> CommentItem:
    """Get a single comment."""
    try:
        return await get_comment_use_case.execute(
            GetCommentRequest(comment_id=comment_id)
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.patch("/comments/{comment_id}", response_model=CommentItem)
async def update_comment(
    comment_id: str,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CommentItem:
    """Update a comment's content.

    Only the comment author can edit, and only while the comment is
    neither frozen nor deleted.

    Raises:
        HTTPException: If not authenticated, not authorized, or not editable
    """
    user_id = require_user_id(jwt_service, auth_token, authorization, "edit comments")

    try:
        return await update_comment_use_case.execute(
            UpdateCommentRequest(
                comment_id=comment_id, user_id=user_id, content=request.content
            )
        )
    except (NotFoundError, ContentDeletedException) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotAuthorizedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except CommentFrozenError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/comments/{comment_id}/freeze", response_model=CommentItem)
async def freeze_comment(
    comment_id: str,
    freeze_comment_use_case: FromDishka[FreezeCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CommentItem:
    """Freeze a comment so it can no longer be edited."""
    user_id = require_user_id(
        jwt_service, auth_token, authorization, "freeze comments"
    )

    try:
        return await freeze_comment_use_case.execute(
            FreezeCommentRequest(comment_id=comment_id, user_id=user_id)
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotAuthorizedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    hard: bool = Query(default=False),
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> DeleteCommentResponse:
    """Delete a comment.

    Soft delete by default; ``?hard=true`` removes the record and turns
    its replies into top-level comments.
    """
    user_id = require_user_id(
        jwt_service, auth_token, authorization, "delete comments"
    )

    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=comment_id, user_id=user_id, hard=hard)
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotAuthorizedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
