"""List posts use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import CommentService, PostService, VoteService
from forum.domain.value import ItemKind, UserId


class PostListItem(BaseModel):
    """Post list item in response."""

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


class ListPostsRequest(BaseModel):
    """List posts request."""

    community: str | None = None  # Filter by community name
    limit: int = Field(default=10, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    user_id: str | None = None  # Current user ID (if authenticated)


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostListItem]
    total: int
    limit: int
    offset: int
    has_more: bool


class ListPostsUseCase(BaseUseCase):
    """Use case for listing recent posts with pagination."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
            vote_service: Vote domain service
        """
        self.post_service = post_service
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: List posts request with filter and pagination

        Returns:
            Page of posts, newest first
        """
        with logfire.span(
            "list_posts.execute",
            community=request.community,
            limit=request.limit,
            offset=request.offset,
        ):
            posts, total = await self.post_service.list_recent(
                community=request.community,
                limit=request.limit,
                offset=request.offset,
            )

            # Get user's votes for these posts (if authenticated)
            user_id = UserId(UUID(request.user_id)) if request.user_id else None
            user_votes: dict[UUID, int] = {}
            if user_id and posts:
                user_votes = await self.vote_service.get_user_votes(
                    user_id=user_id,
                    item_kind=ItemKind.POST,
                    item_ids=[post.id for post in posts],
                )

            comment_counts = await self.comment_service.count_for_posts(
                [post.id for post in posts]
            )

            post_items = [
                PostListItem(
                    post_id=str(post.id),
                    author_id=str(post.author_id),
                    title=post.title,
                    content=post.content,
                    community=post.community,
                    score=post.score,
                    created_at=post.created_at,
                    comment_count=comment_counts[post.id],
                    user_vote=user_votes.get(post.id, 0),
                    is_author=user_id is not None and post.author_id == user_id,
                )
                for post in posts
            ]

            return ListPostsResponse(
                posts=post_items,
                total=total,
                limit=request.limit,
                offset=request.offset,
                has_more=request.offset + len(post_items) < total,
            )
