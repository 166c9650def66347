"""Post domain service."""

from typing import Sequence

import logfire

from forum.domain.model.post import Post
from forum.domain.repository import PostRepository
from forum.domain.value import PostId, UserId

from .base import Service


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def save_post(self, post: Post) -> Post:
        """Save a post.

        Args:
            post: Post to save

        Returns:
            Saved post
        """
        with logfire.span(
            "post_service.save_post", post_id=str(post.id), title=post.title
        ):
            saved = await self.post_repository.save(post)
            logfire.info("Post saved", post_id=str(saved.id))
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id), title=post.title)
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def get_posts_by_ids(self, post_ids: Sequence[PostId]) -> list[Post]:
        """Get several posts by ID; missing posts are skipped."""
        if not post_ids:
            return []

        with logfire.span("post_service.get_posts_by_ids", count=len(post_ids)):
            return await self.post_repository.find_by_ids(post_ids)

    async def lock_post(self, post_id: PostId) -> Post | None:
        """Get a post and hold a row lock on it for the current transaction.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.lock_post", post_id=str(post_id)):
            return await self.post_repository.find_for_update(post_id)

    async def list_recent(
        self, community: str | None = None, limit: int = 10, offset: int = 0
    ) -> tuple[list[Post], int]:
        """List posts newest first.

        Args:
            community: Restrict to one community (None for all)
            limit: Page size
            offset: Number of posts to skip

        Returns:
            The page of posts and the total number of matching posts
        """
        with logfire.span(
            "post_service.list_recent",
            community=community,
            limit=limit,
            offset=offset,
        ):
            total = await self.post_repository.count(community=community)
            posts = await self.post_repository.find_recent(
                community=community, limit=limit, offset=offset
            )
            logfire.info("Posts listed", count=len(posts), total=total)
            return posts, total

    async def get_posts_by_author(self, author_id: UserId) -> list[Post]:
        """Get every post written by a user.

        Args:
            author_id: Author user ID

        Returns:
            Posts by the author
        """
        with logfire.span("post_service.get_posts_by_author", author_id=str(author_id)):
            return await self.post_repository.find_by_author(author_id)

    async def increment_score(self, post_id: PostId, delta: int) -> int:
        """Atomically add delta to a post's score.

        Uses a store-level increment to avoid lost updates.

        Args:
            post_id: Post ID
            delta: Score change

        Returns:
            New score

        Raises:
            ItemNotFoundError: If the post does not exist
        """
        with logfire.span(
            "post_service.increment_score", post_id=str(post_id), delta=delta
        ):
            score = await self.post_repository.increment_score(post_id, delta)
            logfire.info("Post score changed", post_id=str(post_id), score=score)
            return score

    async def delete_post(self, post_id: PostId) -> None:
        """Delete a post record.

        Args:
            post_id: Post ID
        """
        with logfire.span("post_service.delete_post", post_id=str(post_id)):
            await self.post_repository.delete(post_id)
            logfire.info("Post deleted", post_id=str(post_id))
