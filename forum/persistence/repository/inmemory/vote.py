"""In-memory vote repository for testing."""

from typing import Optional, Sequence
from uuid import UUID

from forum.domain.error import DuplicateVoteError
from forum.domain.model.vote import Vote
from forum.domain.repository.vote import VoteRepository
from forum.domain.value import ItemKind, UserId, VoteKey, VoteValue

from .journal import record_undo


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing.

    Votes are keyed by their (user, item) slot, which enforces the same
    uniqueness as the database constraint.
    """

    def __init__(self) -> None:
        self._votes: dict[VoteKey, Vote] = {}

    def _restore(self, key: VoteKey, previous: Optional[Vote]) -> None:
        if previous is None:
            self._votes.pop(key, None)
        else:
            self._votes[key] = previous

    async def find_by_user_and_item(
        self,
        user_id: UserId,
        item_kind: ItemKind,
        item_id: UUID,
    ) -> Optional[Vote]:
        """Find a vote by user and item."""
        return self._votes.get(
            VoteKey(user_id=user_id, item_kind=item_kind, item_id=item_id)
        )

    async def find_by_user_and_items(
        self,
        user_id: UserId,
        item_kind: ItemKind,
        item_ids: Sequence[UUID],
    ) -> list[Vote]:
        """Find a user's votes on multiple items."""
        wanted = set(item_ids)
        return [
            v
            for v in self._votes.values()
            if v.user_id == user_id and v.item_kind == item_kind and v.item_id in wanted
        ]

    async def find_by_item(self, item_kind: ItemKind, item_id: UUID) -> list[Vote]:
        """Find all votes on an item."""
        return [
            v
            for v in self._votes.values()
            if v.item_kind == item_kind and v.item_id == item_id
        ]

    async def find_by_user(self, user_id: UserId) -> list[Vote]:
        """Find all votes by a user."""
        return [v for v in self._votes.values() if v.user_id == user_id]

    async def save(self, vote: Vote) -> Vote:
        """Insert a vote.

        Raises:
            DuplicateVoteError: If the user already voted on the item
        """
        key = vote.key
        if key in self._votes:
            raise DuplicateVoteError(str(key))

        self._votes[key] = vote
        record_undo(lambda: self._restore(key, None))
        return vote

    async def update_value(self, vote: Vote, value: VoteValue) -> Vote:
        """Change the value of a vote."""
        key = vote.key
        previous = self._votes.get(key)
        updated = vote.model_copy(update={"value": value})
        self._votes[key] = updated
        record_undo(lambda: self._restore(key, previous))
        return updated

    async def delete(self, vote: Vote) -> None:
        """Delete a vote."""
        key = vote.key
        previous = self._votes.pop(key, None)
        if previous is not None:
            record_undo(lambda: self._restore(key, previous))

    async def delete_by_items(
        self, item_kind: ItemKind, item_ids: Sequence[UUID]
    ) -> int:
        """Delete every vote on the given items."""
        wanted = set(item_ids)
        removed = {
            key: vote
            for key, vote in self._votes.items()
            if vote.item_kind == item_kind and vote.item_id in wanted
        }
        for key in removed:
            del self._votes[key]
        if removed:
            record_undo(lambda: self._votes.update(removed))
        return len(removed)
