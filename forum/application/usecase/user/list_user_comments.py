"""List user comments use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import CommentService, PostService, VoteService
from forum.domain.value import ItemKind, UserId


class UserCommentItem(BaseModel):
    """A user's comment, with the post it was left on."""

    comment_id: str
    post_id: str
    post_title: str
    post_community: str
    content: str
    parent_id: str | None
    depth: int
    score: int
    created_at: datetime
    user_vote: int
    is_author: bool


class ListUserCommentsRequest(BaseModel):
    """List user comments request."""

    user_id: str  # Author whose comments are listed
    viewer_id: str | None = None  # Current user ID (if authenticated)


class ListUserCommentsResponse(BaseModel):
    """List user comments response."""

    user_id: str
    comments: list[UserCommentItem]
    total: int


class ListUserCommentsUseCase(BaseUseCase):
    """Use case for listing every comment a user wrote, newest first."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> None:
        self.post_service = post_service
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(
        self, request: ListUserCommentsRequest
    ) -> ListUserCommentsResponse:
        """Execute list user comments flow.

        Post titles are loaded in one batch; a comment whose post vanished
        between the two reads is left out.
        """
        with logfire.span("list_user_comments.execute", user_id=request.user_id):
            author_id = UserId(UUID(request.user_id))
            comments = await self.comment_service.get_comments_by_author(author_id)

            post_ids = list({comment.post_id for comment in comments})
            posts = {
                post.id: post
                for post in await self.post_service.get_posts_by_ids(post_ids)
            }

            viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None
            viewer_votes: dict[UUID, int] = {}
            if viewer_id and comments:
                viewer_votes = await self.vote_service.get_user_votes(
                    user_id=viewer_id,
                    item_kind=ItemKind.COMMENT,
                    item_ids=[comment.id for comment in comments],
                )

            items = [
                UserCommentItem(
                    comment_id=str(comment.id),
                    post_id=str(comment.post_id),
                    post_title=posts[comment.post_id].title,
                    post_community=posts[comment.post_id].community,
                    content=comment.content,
                    parent_id=str(comment.parent_id) if comment.parent_id else None,
                    depth=comment.depth,
                    score=comment.score,
                    created_at=comment.created_at,
                    user_vote=viewer_votes.get(comment.id, 0),
                    is_author=viewer_id == author_id,
                )
                for comment in comments
                if comment.post_id in posts
            ]
            return ListUserCommentsResponse(
                user_id=request.user_id, comments=items, total=len(items)
            )
