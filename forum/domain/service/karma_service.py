"""Karma domain service."""

import logfire

from forum.domain.value import UserId

from .base import Service
from .comment_service import CommentService
from .post_service import PostService


class KarmaService(Service):
    """Computes a user's karma from the scores of what they wrote.

    Karma is never stored. Reads run at the store's default isolation, so
    a vote landing mid-computation may or may not be counted.
    """

    def __init__(
        self, post_service: PostService, comment_service: CommentService
    ) -> None:
        self.post_service = post_service
        self.comment_service = comment_service

    async def karma(self, user_id: UserId) -> int:
        """Sum the scores of every post and comment authored by a user.

        Args:
            user_id: User ID

        Returns:
            The user's karma (0 for users who have written nothing)
        """
        with logfire.span("karma_service.karma", user_id=str(user_id)):
            posts = await self.post_service.get_posts_by_author(user_id)
            comments = await self.comment_service.get_comments_by_author(user_id)

            karma = sum(post.score for post in posts) + sum(
                comment.score for comment in comments
            )
            logfire.info(
                "Karma computed",
                user_id=str(user_id),
                posts=len(posts),
                comments=len(comments),
                karma=karma,
            )
            return karma
