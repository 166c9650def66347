"""Vote domain service."""

from datetime import datetime
from typing import Any, Sequence
from uuid import UUID, uuid4

import logfire

from forum.config import VotingSettings
from forum.domain.error import DuplicateVoteError, ItemNotFoundError
from forum.domain.model.transition import VoteAction, transition
from forum.domain.model.vote import Vote
from forum.domain.repository import UnitOfWork, VoteRepository
from forum.domain.value import (
    CommentId,
    ItemKind,
    PostId,
    UserId,
    VoteId,
    VoteKey,
    VoteType,
    parse_vote_type,
)

from .base import Service
from .comment_service import CommentService
from .post_service import PostService


class VoteService(Service):
    """Domain service for vote operations.

    Keeps each item's score equal to the sum of its vote values. Every
    change to a vote slot runs inside a scope serialized on that slot, and
    the vote mutation and score increment commit or roll back together.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_service: PostService,
        comment_service: CommentService,
        unit_of_work: UnitOfWork,
        voting_settings: VotingSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            post_service: Post domain service
            comment_service: Comment domain service
            unit_of_work: Atomic scopes over the vote and item stores
            voting_settings: Voting settings
        """
        self.vote_repository = vote_repository
        self.post_service = post_service
        self.comment_service = comment_service
        self.unit_of_work = unit_of_work
        self.voting_settings = voting_settings

    async def apply_vote(
        self,
        user_id: UserId,
        item_id: UUID,
        item_kind: ItemKind,
        requested: Any,
    ) -> int:
        """Move a user's vote on an item to the requested type.

        Steps:
        1. Validate the requested type
        2. Load the item (fails before anything is written)
        3. Load the user's existing vote
        4. Compute the transition
        5. Insert, update or delete the vote
        6. Atomically add the delta to the item's score

        A lost insert race on the same vote slot is retried by re-reading
        the slot and re-applying the transition.

        Args:
            user_id: Voting user ID
            item_id: Post or comment ID
            item_kind: Type of the item
            requested: Requested vote type (-1, 0 or 1)

        Returns:
            The item's score after the vote

        Raises:
            InvalidVoteTypeError: If the requested type is not -1, 0 or 1
            ItemNotFoundError: If the item does not exist
            DuplicateVoteError: If the insert race persists past all retries
        """
        vote_type = parse_vote_type(requested)
        key = VoteKey(user_id=user_id, item_kind=item_kind, item_id=item_id)

        with logfire.span(
            "vote_service.apply_vote",
            user_id=str(user_id),
            item_kind=item_kind.value,
            item_id=str(item_id),
            vote_type=int(vote_type),
        ):
            max_attempts = self.voting_settings.max_duplicate_retries
            attempt = 0
            while True:
                attempt += 1
                try:
                    return await self._apply_once(key, vote_type)
                except DuplicateVoteError:
                    if attempt >= max_attempts:
                        logfire.error(
                            "Vote insert race not resolved",
                            key=str(key),
                            attempts=attempt,
                        )
                        raise
                    logfire.warn(
                        "Duplicate vote insert, retrying",
                        key=str(key),
                        attempt=attempt,
                    )

    async def _apply_once(self, key: VoteKey, vote_type: VoteType) -> int:
        async with self.unit_of_work.serialized(key):
            current_score = await self._current_score(key.item_kind, key.item_id)

            existing = await self.vote_repository.find_by_user_and_item(
                user_id=key.user_id,
                item_kind=key.item_kind,
                item_id=key.item_id,
            )
            step = transition(existing.value if existing else None, vote_type)

            if step.action is VoteAction.NOOP:
                logfire.info("Vote unchanged", key=str(key), score=current_score)
                return current_score

            # Insert from no vote, update between values, delete back to no vote
            new_value = step.new_value
            if existing is None and new_value is not None:
                await self.vote_repository.save(
                    Vote(
                        id=VoteId(uuid4()),
                        user_id=key.user_id,
                        item_kind=key.item_kind,
                        item_id=key.item_id,
                        value=new_value,
                        created_at=datetime.now(),
                    )
                )
            elif existing is not None and new_value is not None:
                await self.vote_repository.update_value(existing, new_value)
            elif existing is not None:
                await self.vote_repository.delete(existing)

            score = await self._increment_score(key.item_kind, key.item_id, step.delta)
            logfire.info(
                "Vote applied",
                key=str(key),
                action=step.action.value,
                delta=step.delta,
                score=score,
            )
            return score

    async def _current_score(self, item_kind: ItemKind, item_id: UUID) -> int:
        item: Any
        if item_kind is ItemKind.POST:
            item = await self.post_service.get_post_by_id(PostId(item_id))
        else:
            item = await self.comment_service.get_comment_by_id(CommentId(item_id))

        if item is None:
            logfire.warn(
                "Vote on non-existent item",
                item_kind=item_kind.value,
                item_id=str(item_id),
            )
            raise ItemNotFoundError(item_kind.value, str(item_id))
        return item.score

    async def _increment_score(
        self, item_kind: ItemKind, item_id: UUID, delta: int
    ) -> int:
        if item_kind is ItemKind.POST:
            return await self.post_service.increment_score(PostId(item_id), delta)
        return await self.comment_service.increment_score(CommentId(item_id), delta)

    async def seed_author_vote(
        self, author_id: UserId, item_kind: ItemKind, item_id: UUID
    ) -> int:
        """Cast the author's implicit upvote on a newly created item.

        Goes through the ordinary vote path, so the item ends up with a
        real vote record and a score of 1.

        Returns:
            The item's score after the vote
        """
        return await self.apply_vote(author_id, item_id, item_kind, VoteType.UP)

    async def delete_item_votes(
        self, item_kind: ItemKind, item_ids: Sequence[UUID]
    ) -> int:
        """Delete every vote on the given items.

        Args:
            item_kind: Type of the items
            item_ids: Item IDs

        Returns:
            Number of votes deleted
        """
        if not item_ids:
            return 0

        with logfire.span(
            "vote_service.delete_item_votes",
            item_kind=item_kind.value,
            count=len(item_ids),
        ):
            deleted = await self.vote_repository.delete_by_items(item_kind, item_ids)
            logfire.info(
                "Item votes deleted", item_kind=item_kind.value, votes=deleted
            )
            return deleted

    async def get_user_votes(
        self, user_id: UserId, item_kind: ItemKind, item_ids: Sequence[UUID]
    ) -> dict[UUID, int]:
        """Get a user's vote on each of several items.

        Args:
            user_id: User ID
            item_kind: Type of the items
            item_ids: Item IDs to check

        Returns:
            Mapping of item ID to -1, 0 or 1 (0 when the user has not voted)
        """
        if not item_ids:
            return {}

        # Batch query to avoid N+1
        votes = await self.vote_repository.find_by_user_and_items(
            user_id=user_id,
            item_kind=item_kind,
            item_ids=item_ids,
        )
        values = {vote.item_id: int(vote.value) for vote in votes}
        return {item_id: values.get(item_id, 0) for item_id in item_ids}

    async def get_user_vote(
        self, user_id: UserId, item_kind: ItemKind, item_id: UUID
    ) -> int:
        """Get a user's vote on one item (-1, 0 or 1)."""
        vote = await self.vote_repository.find_by_user_and_item(
            user_id=user_id, item_kind=item_kind, item_id=item_id
        )
        return int(vote.value) if vote else 0

    async def get_votes_by_user(self, user_id: UserId) -> list[Vote]:
        """Get every vote a user has cast."""
        with logfire.span("vote_service.get_votes_by_user", user_id=str(user_id)):
            return await self.vote_repository.find_by_user(user_id)
