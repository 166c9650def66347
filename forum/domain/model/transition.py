"""Vote state transitions.

A user's vote on an item is in one of three states: no vote, up (+1) or
down (-1). Requesting a vote type moves the slot to a new state and
changes the item's score by a delta:

    existing  requested  action   delta
    none      0          noop     0
    none      +1/-1      insert   requested
    v         0          delete   -v
    v         v          noop     0
    v         -v         update   -2v

Re-requesting the current value is idempotent; it does not toggle the
vote off.
"""

from enum import Enum
from typing import Optional

from forum.domain.model.common import DomainModel
from forum.domain.value import VoteType, VoteValue


class VoteAction(str, Enum):
    """Mutation the vote store must perform."""

    NOOP = "noop"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class VoteTransition(DomainModel):
    """Result of applying a requested vote type to the current state."""

    action: VoteAction
    new_value: Optional[VoteValue] = None
    delta: int = 0


def transition(existing: Optional[VoteValue], requested: VoteType) -> VoteTransition:
    """Compute the next vote state and score delta.

    Args:
        existing: Current stored vote value, None if the user has not voted
        requested: Requested vote type

    Returns:
        The store action, the value to store (insert/update only) and the
        score delta
    """
    target = requested.as_value()

    if existing is None:
        if target is None:
            return VoteTransition(action=VoteAction.NOOP)
        return VoteTransition(
            action=VoteAction.INSERT, new_value=target, delta=int(target)
        )

    if target is None:
        return VoteTransition(action=VoteAction.DELETE, delta=-int(existing))

    if target == existing:
        return VoteTransition(action=VoteAction.NOOP)

    return VoteTransition(
        action=VoteAction.UPDATE, new_value=target, delta=int(target) - int(existing)
    )
