"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum, IntEnum
from typing import Any
from uuid import UUID

from forum.domain.error import InvalidVoteTypeError
from forum.domain.value.common import ValueObject
from forum.domain.value.identifiers import UserId


class ItemKind(str, Enum):
    """Type of item that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class VoteValue(IntEnum):
    """Value of a stored vote.

    There is no zero member: a neutral vote is represented by the
    absence of a vote record.
    """

    UP = 1
    DOWN = -1


class VoteType(IntEnum):
    """Vote type requested by a user."""

    UP = 1
    NONE = 0
    DOWN = -1

    def as_value(self) -> VoteValue | None:
        """Map the requested type onto the stored vote state."""
        if self is VoteType.NONE:
            return None
        return VoteValue(int(self))


def parse_vote_type(raw: Any) -> VoteType:
    """Parse a raw requested vote type.

    Only the integers -1, 0 and 1 are accepted. Booleans, floats and
    strings are rejected even when they compare equal to an accepted value.

    Raises:
        InvalidVoteTypeError: If the value is not one of -1, 0, 1
    """
    if isinstance(raw, VoteType):
        return raw
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise InvalidVoteTypeError(raw)
    try:
        return VoteType(raw)
    except ValueError:
        raise InvalidVoteTypeError(raw)


class VoteKey(ValueObject):
    """Identifies the single vote slot a user has on an item."""

    user_id: UserId
    item_kind: ItemKind
    item_id: UUID

    def __str__(self) -> str:
        return f"{self.user_id}:{self.item_kind.value}:{self.item_id}"
