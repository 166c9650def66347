"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from forum.domain.model.comment import Comment
from forum.domain.value import CommentId, PostId, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_for_update(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID and lock it until the transaction ends.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_for_update_many(
        self, comment_ids: Sequence[CommentId]
    ) -> List[Comment]:
        """Find comments by ID and lock them until the transaction ends.

        Rows are locked in ID order so concurrent callers cannot deadlock.

        Args:
            comment_ids: IDs of the comments to lock

        Returns:
            The comments that still exist
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments for a post, newest first.

        Args:
            post_id: The post's ID

        Returns:
            List of comments on the post
        """
        pass

    @abstractmethod
    async def count_by_posts(self, post_ids: Sequence[PostId]) -> Dict[PostId, int]:
        """Count the comments on each of several posts.

        Args:
            post_ids: Post IDs

        Returns:
            Mapping of post ID to comment count (posts without comments
            may be missing)
        """
        pass

    @abstractmethod
    async def find_by_author(self, author_id: UserId) -> List[Comment]:
        """Find every comment by a specific author.

        Args:
            author_id: The author's user ID

        Returns:
            List of comments by the author, newest first
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a new comment.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete several comments (hard delete).

        Args:
            comment_ids: IDs of the comments to delete

        Returns:
            Number of comments deleted
        """
        pass

    @abstractmethod
    async def increment_score(self, comment_id: CommentId, delta: int) -> int:
        """Atomically add delta to the comment's score.

        Args:
            comment_id: The comment ID
            delta: Amount to add (may be negative)

        Returns:
            The score after the increment

        Raises:
            ItemNotFoundError: If the comment does not exist
        """
        pass
