"""List user posts use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.application.usecase.post import PostListItem
from forum.domain.service import CommentService, PostService, VoteService
from forum.domain.value import ItemKind, UserId


class ListUserPostsRequest(BaseModel):
    """List user posts request."""

    user_id: str  # Author whose posts are listed
    viewer_id: str | None = None  # Current user ID (if authenticated)


class ListUserPostsResponse(BaseModel):
    """List user posts response."""

    user_id: str
    posts: list[PostListItem]
    total: int


class ListUserPostsUseCase(BaseUseCase):
    """Use case for listing every post a user wrote, newest first."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> None:
        """Initialize list user posts use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
            vote_service: Vote domain service
        """
        self.post_service = post_service
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: ListUserPostsRequest) -> ListUserPostsResponse:
        """Execute list user posts flow.

        A user with no posts gets an empty list.
        """
        with logfire.span("list_user_posts.execute", user_id=request.user_id):
            author_id = UserId(UUID(request.user_id))
            posts = await self.post_service.get_posts_by_author(author_id)
            post_ids = [post.id for post in posts]

            viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None
            viewer_votes: dict[UUID, int] = {}
            if viewer_id and posts:
                viewer_votes = await self.vote_service.get_user_votes(
                    user_id=viewer_id, item_kind=ItemKind.POST, item_ids=post_ids
                )
            comment_counts = await self.comment_service.count_for_posts(post_ids)

            items = [
                PostListItem(
                    post_id=str(post.id),
                    author_id=str(post.author_id),
                    title=post.title,
                    content=post.content,
                    community=post.community,
                    score=post.score,
                    created_at=post.created_at,
                    comment_count=comment_counts[post.id],
                    user_vote=viewer_votes.get(post.id, 0),
                    is_author=viewer_id == author_id,
                )
                for post in posts
            ]
            return ListUserPostsResponse(
                user_id=request.user_id, posts=items, total=len(items)
            )
