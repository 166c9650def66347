"""Create comment use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import ContentService
from forum.domain.value import CommentId, PostId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    content: str
    author_id: str  # User ID from authenticated user
    parent_id: str | None = None  # UUID string (None for top-level)


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment_id: str
    post_id: str
    author_id: str
    content: str
    parent_id: str | None
    depth: int
    score: int
    created_at: datetime
    user_vote: int


class CreateCommentUseCase(BaseUseCase):
    """Use case for creating a comment or reply."""

    def __init__(self, content_service: ContentService) -> None:
        """Initialize create comment use case.

        Args:
            content_service: Content lifecycle domain service
        """
        self.content_service = content_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            Created comment details

        Raises:
            ItemNotFoundError: If post not found
            ValueError: If parent comment is invalid
        """
        with logfire.span(
            "create_comment.execute",
            post_id=request.post_id,
            parent_id=request.parent_id,
        ):
            comment = await self.content_service.create_comment(
                post_id=PostId(UUID(request.post_id)),
                author_id=UserId(UUID(request.author_id)),
                content=request.content,
                parent_id=(
                    CommentId(UUID(request.parent_id)) if request.parent_id else None
                ),
            )

            return CreateCommentResponse(
                comment_id=str(comment.id),
                post_id=str(comment.post_id),
                author_id=str(comment.author_id),
                content=comment.content,
                parent_id=str(comment.parent_id) if comment.parent_id else None,
                depth=comment.depth,
                score=comment.score,
                created_at=comment.created_at,
                user_vote=1,  # Author's own upvote
            )
