"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from forum.domain.model.post import Post
from forum.domain.value import PostId, UserId


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, post_ids: Sequence[PostId]) -> List[Post]:
        """Find several posts by ID in one query.

        Args:
            post_ids: Post IDs

        Returns:
            The posts that exist, in no particular order
        """
        pass

    @abstractmethod
    async def find_for_update(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID and lock it until the transaction ends.

        Used before deleting a post so that concurrent votes either commit
        before the cascade runs or fail once the post is gone.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_recent(
        self,
        community: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts, newest first.

        Args:
            community: Filter by community name (None for all communities)
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts matching the criteria
        """
        pass

    @abstractmethod
    async def count(self, community: Optional[str] = None) -> int:
        """Count posts, optionally within one community.

        Args:
            community: Filter by community name (None for all communities)

        Returns:
            Total number of posts matching the criteria
        """
        pass

    @abstractmethod
    async def find_by_author(self, author_id: UserId) -> List[Post]:
        """Find every post by a specific author.

        Args:
            author_id: The author's user ID

        Returns:
            List of posts by the author, newest first
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a new post.

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> None:
        """Delete a post (hard delete).

        Callers are responsible for removing the post's comments and votes
        first.

        Args:
            post_id: The post ID to delete
        """
        pass

    @abstractmethod
    async def increment_score(self, post_id: PostId, delta: int) -> int:
        """Atomically add delta to the post's score.

        Uses a store-level increment so concurrent deltas from different
        voters are all reflected.

        Args:
            post_id: The post ID
            delta: Amount to add (may be negative)

        Returns:
            The score after the increment

        Raises:
            ItemNotFoundError: If the post does not exist
        """
        pass
