"""Delete post use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import ContentService
from forum.domain.value import PostId, UserId


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class DeletePostResponse(BaseModel):
    """Delete post response."""

    success: bool
    votes_removed: int


class DeletePostUseCase(BaseUseCase):
    """Use case for deleting a post together with its comments and votes."""

    def __init__(self, content_service: ContentService) -> None:
        self.content_service = content_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Raises:
            ItemNotFoundError: If post not found
            NotAuthorizedError: If user is not the author
        """
        removed = await self.content_service.delete_post(
            PostId(UUID(request.post_id)), UserId(UUID(request.user_id))
        )
        return DeletePostResponse(success=True, votes_removed=removed)
