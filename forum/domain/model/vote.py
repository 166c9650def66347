"""Vote entity.

A vote is one user's up or down opinion of one item (post or comment).
Each user can hold at most one vote per item. A neutral opinion is not
stored: the absence of a vote record is the zero state.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import ItemKind, UserId, VoteId, VoteKey, VoteValue


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per item (enforced by a unique constraint)
    - Value is +1 or -1, never 0
    - Polymorphic reference to the item (post or comment)
    """

    id: VoteId
    user_id: UserId
    item_kind: ItemKind
    item_id: UUID  # PostId or CommentId (both are UUIDs)
    value: VoteValue
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def key(self) -> VoteKey:
        """Vote slot this record occupies."""
        return VoteKey(
            user_id=self.user_id, item_kind=self.item_kind, item_id=self.item_id
        )
