"""Cast vote use case."""

from typing import Any
from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import VoteService
from forum.domain.value import ItemKind, UserId


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    item_kind: ItemKind
    item_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    vote_type: Any  # Validated by VoteService


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    votes: int  # Item score after the vote


class CastVoteUseCase(BaseUseCase):
    """Use case for moving a user's vote on a post or comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            The item's new score

        Raises:
            InvalidVoteTypeError: If vote type is not -1, 0 or 1
            ItemNotFoundError: If the item does not exist
        """
        with logfire.span(
            "cast_vote.execute",
            item_kind=request.item_kind.value,
            item_id=request.item_id,
        ):
            score = await self.vote_service.apply_vote(
                user_id=UserId(UUID(request.user_id)),
                item_id=UUID(request.item_id),
                item_kind=request.item_kind,
                requested=request.vote_type,
            )
            return CastVoteResponse(votes=score)
