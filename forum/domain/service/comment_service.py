"""Comment domain service."""

from collections import defaultdict
from datetime import datetime
from typing import Sequence
from uuid import uuid4

import logfire

from forum.domain.model.comment import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, PostId, UserId

from .base import Service


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def save_new_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Persist a comment on a post or a reply to another comment.

        The comment is stored with a score of 0; the caller seeds the
        author's vote.

        Args:
            post_id: Post ID
            author_id: Author user ID
            content: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Saved comment

        Raises:
            ValueError: If parent comment invalid
        """
        with logfire.span(
            "comment_service.save_new_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            # If replying, verify parent exists and calculate depth
            depth = 0
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.error(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise ValueError("Parent comment not found")
                if parent.post_id != post_id:
                    logfire.error(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValueError("Parent comment does not belong to this post")
                depth = parent.depth + 1

            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                content=content,
                parent_id=parent_id,
                depth=depth,
                score=0,
                created_at=datetime.now(),
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                depth=depth,
            )
            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment:
                logfire.info("Comment found", comment_id=str(comment_id))
            else:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def lock_comment(self, comment_id: CommentId) -> Comment | None:
        """Get a comment and hold a row lock on it for the current transaction."""
        with logfire.span("comment_service.lock_comment", comment_id=str(comment_id)):
            return await self.comment_repository.find_for_update(comment_id)

    async def lock_comments(self, comment_ids: Sequence[CommentId]) -> list[Comment]:
        """Hold row locks on several comments for the current transaction.

        A vote on a locked comment waits until the lock holder commits,
        so a cascade that locks a thread first cannot miss a vote.
        """
        if not comment_ids:
            return []

        with logfire.span("comment_service.lock_comments", count=len(comment_ids)):
            return await self.comment_repository.find_for_update_many(comment_ids)

    async def get_comments_for_post(self, post_id: PostId) -> list[Comment]:
        """Get all comments for a post, newest first.

        Args:
            post_id: Post ID

        Returns:
            List of comments
        """
        with logfire.span(
            "comment_service.get_comments_for_post", post_id=str(post_id)
        ):
            comments = await self.comment_repository.find_by_post(post_id)
            logfire.info(
                "Comments retrieved for post",
                post_id=str(post_id),
                count=len(comments),
            )
            return comments

    async def count_for_posts(self, post_ids: Sequence[PostId]) -> dict[PostId, int]:
        """Count the comments on each post; posts without comments map to 0."""
        with logfire.span("comment_service.count_for_posts", count=len(post_ids)):
            counts = await self.comment_repository.count_by_posts(post_ids)
            return {post_id: counts.get(post_id, 0) for post_id in post_ids}

    async def get_comments_by_author(self, author_id: UserId) -> list[Comment]:
        """Get every comment written by a user."""
        with logfire.span(
            "comment_service.get_comments_by_author", author_id=str(author_id)
        ):
            return await self.comment_repository.find_by_author(author_id)

    async def get_thread(self, comment: Comment) -> list[Comment]:
        """Get the replies below a comment, at any depth.

        Args:
            comment: Root of the thread

        Returns:
            Every descendant of the comment (the comment itself excluded)
        """
        with logfire.span("comment_service.get_thread", comment_id=str(comment.id)):
            siblings = await self.comment_repository.find_by_post(comment.post_id)

            children: dict[CommentId, list[Comment]] = defaultdict(list)
            for candidate in siblings:
                if candidate.parent_id is not None:
                    children[candidate.parent_id].append(candidate)

            descendants: list[Comment] = []
            pending = [comment.id]
            while pending:
                current = pending.pop()
                for child in children.get(current, []):
                    descendants.append(child)
                    pending.append(child.id)

            logfire.info(
                "Comment thread collected",
                comment_id=str(comment.id),
                replies=len(descendants),
            )
            return descendants

    async def increment_score(self, comment_id: CommentId, delta: int) -> int:
        """Atomically add delta to a comment's score.

        Args:
            comment_id: Comment ID
            delta: Score change

        Returns:
            New score

        Raises:
            ItemNotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_service.increment_score",
            comment_id=str(comment_id),
            delta=delta,
        ):
            score = await self.comment_repository.increment_score(comment_id, delta)
            logfire.info(
                "Comment score changed", comment_id=str(comment_id), score=score
            )
            return score

    async def delete_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comment records.

        Args:
            comment_ids: IDs of comments to delete

        Returns:
            Number of comments deleted
        """
        if not comment_ids:
            return 0

        with logfire.span("comment_service.delete_comments", count=len(comment_ids)):
            deleted = await self.comment_repository.delete_many(comment_ids)
            logfire.info("Comments deleted", count=deleted)
            return deleted
