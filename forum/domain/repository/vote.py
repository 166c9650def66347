"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from forum.domain.model.vote import Vote
from forum.domain.value import ItemKind, UserId, VoteValue


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_user_and_item(
        self,
        user_id: UserId,
        item_kind: ItemKind,
        item_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item.

        Args:
            user_id: The user's ID
            item_kind: Type of item (post or comment)
            item_id: ID of the item

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_items(
        self,
        user_id: UserId,
        item_kind: ItemKind,
        item_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query).

        Args:
            user_id: The user's ID
            item_kind: Type of items (post or comment)
            item_ids: List of item IDs to check

        Returns:
            List of votes by the user on the given items
        """
        pass

    @abstractmethod
    async def find_by_item(self, item_kind: ItemKind, item_id: UUID) -> List[Vote]:
        """Find all votes on a specific item.

        Args:
            item_kind: Type of item (post or comment)
            item_id: ID of the item

        Returns:
            List of votes on the item
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> List[Vote]:
        """Find all votes cast by a user.

        Args:
            user_id: The user's ID

        Returns:
            List of votes by the user
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert a new vote.

        Args:
            vote: The vote to save

        Returns:
            The saved vote

        Raises:
            DuplicateVoteError: If the user already has a vote on the item
        """
        pass

    @abstractmethod
    async def update_value(self, vote: Vote, value: VoteValue) -> Vote:
        """Change the value of an existing vote.

        Args:
            vote: The vote to update
            value: The new value

        Returns:
            The updated vote
        """
        pass

    @abstractmethod
    async def delete(self, vote: Vote) -> None:
        """Delete a vote.

        Used when a user retracts their vote.

        Args:
            vote: The vote to delete
        """
        pass

    @abstractmethod
    async def delete_by_items(
        self, item_kind: ItemKind, item_ids: Sequence[UUID]
    ) -> int:
        """Delete every vote on the given items.

        Used when items are deleted.

        Args:
            item_kind: Type of the items (post or comment)
            item_ids: IDs of the items

        Returns:
            Number of votes deleted
        """
        pass
