"""Create post use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import ContentService
from forum.domain.value import UserId


class CreatePostRequest(BaseModel):
    """Create post request."""

    title: str
    community: str
    author_id: str  # User ID from authenticated user
    content: str | None = None


class CreatePostResponse(BaseModel):
    """Create post response."""

    post_id: str
    author_id: str
    title: str
    content: str | None
    community: str
    score: int
    created_at: datetime
    user_vote: int


class CreatePostUseCase(BaseUseCase):
    """Use case for creating a new post."""

    def __init__(self, content_service: ContentService) -> None:
        """Initialize create post use case.

        Args:
            content_service: Content lifecycle domain service
        """
        self.content_service = content_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        The post is saved and upvoted by its author in one transaction.

        Args:
            request: Create post request

        Returns:
            Created post details

        Raises:
            ValidationError: If title, content or community violate post rules
        """
        with logfire.span(
            "create_post.execute", title=request.title, community=request.community
        ):
            post = await self.content_service.create_post(
                author_id=UserId(UUID(request.author_id)),
                title=request.title,
                community=request.community,
                content=request.content,
            )

            return CreatePostResponse(
                post_id=str(post.id),
                author_id=str(post.author_id),
                title=post.title,
                content=post.content,
                community=post.community,
                score=post.score,
                created_at=post.created_at,
                user_vote=1,  # Author's own upvote
            )
