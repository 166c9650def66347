"""Get post use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import CommentService, PostService, VoteService
from forum.domain.value import ItemKind, PostId, UserId


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string
    user_id: str | None = None  # Current user ID (if authenticated)


class GetPostResponse(BaseModel):
    """Get post response."""

    post_id: str
    author_id: str
    title: str
    content: str | None
    community: str
    score: int
    created_at: datetime
    comment_count: int
    user_vote: int
    is_author: bool


class GetPostUseCase(BaseUseCase):
    """Use case for retrieving a post by ID."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
            vote_service: Vote domain service
        """
        self.post_service = post_service
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: GetPostRequest) -> Optional[GetPostResponse]:
        """Execute get post flow.

        Args:
            request: Get post request with post ID and optional user ID

        Returns:
            Post details if found, None otherwise
        """
        post = await self.post_service.get_post_by_id(PostId(UUID(request.post_id)))
        if not post:
            return None

        counts = await self.comment_service.count_for_posts([post.id])

        user_vote = 0
        is_author = False
        if request.user_id:
            user_id = UserId(UUID(request.user_id))
            user_vote = await self.vote_service.get_user_vote(
                user_id=user_id, item_kind=ItemKind.POST, item_id=post.id
            )
            is_author = post.author_id == user_id

        return GetPostResponse(
            post_id=str(post.id),
            author_id=str(post.author_id),
            title=post.title,
            content=post.content,
            community=post.community,
            score=post.score,
            created_at=post.created_at,
            comment_count=counts[post.id],
            user_vote=user_vote,
            is_author=is_author,
        )
