"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import ContentService
from forum.domain.value import CommentId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    success: bool
    votes_removed: int


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting a comment with its replies and their votes."""

    def __init__(self, content_service: ContentService) -> None:
        self.content_service = content_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            ItemNotFoundError: If comment not found
            NotAuthorizedError: If user is not the author
        """
        removed = await self.content_service.delete_comment(
            CommentId(UUID(request.comment_id)), UserId(UUID(request.user_id))
        )
        return DeleteCommentResponse(success=True, votes_removed=removed)
