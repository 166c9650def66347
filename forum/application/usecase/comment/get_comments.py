"""Get comments use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.error import ItemNotFoundError
from forum.domain.service import CommentService, PostService, VoteService
from forum.domain.value import ItemKind, PostId, UserId


class CommentItem(BaseModel):
    """Comment item in response."""

    comment_id: str
    post_id: str
    author_id: str
    content: str
    parent_id: str | None
    depth: int
    score: int
    created_at: datetime
    user_vote: int
    is_author: bool


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_id: str  # UUID string
    user_id: str | None = None  # Current user ID (if authenticated)


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    post_id: str
    comments: list[CommentItem]
    total: int


class GetCommentsUseCase(BaseUseCase):
    """Use case for getting all comments for a post, newest first."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> None:
        """Initialize get comments use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
            vote_service: Vote service for checking user votes
        """
        self.post_service = post_service
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Args:
            request: Get comments request with post ID and optional user ID

        Returns:
            Comments with the caller's vote state

        Raises:
            ItemNotFoundError: If post not found
        """
        post_id = PostId(UUID(request.post_id))
        post = await self.post_service.get_post_by_id(post_id)
        if not post:
            raise ItemNotFoundError(ItemKind.POST.value, request.post_id)

        comments = await self.comment_service.get_comments_for_post(post_id)

        # Batch query for the user's votes (if authenticated)
        user_id = UserId(UUID(request.user_id)) if request.user_id else None
        user_votes: dict[UUID, int] = {}
        if user_id and comments:
            user_votes = await self.vote_service.get_user_votes(
                user_id=user_id,
                item_kind=ItemKind.COMMENT,
                item_ids=[comment.id for comment in comments],
            )

        comment_items = [
            CommentItem(
                comment_id=str(comment.id),
                post_id=str(comment.post_id),
                author_id=str(comment.author_id),
                content=comment.content,
                parent_id=str(comment.parent_id) if comment.parent_id else None,
                depth=comment.depth,
                score=comment.score,
                created_at=comment.created_at,
                user_vote=user_votes.get(comment.id, 0),
                is_author=user_id is not None and comment.author_id == user_id,
            )
            for comment in comments
        ]

        return GetCommentsResponse(
            post_id=request.post_id,
            comments=comment_items,
            total=len(comment_items),
        )
