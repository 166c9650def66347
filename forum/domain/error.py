"""Domain layer errors."""

from typing import Any


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ItemNotFoundError(NotFoundError):
    """Raised when a vote targets a post or comment that does not exist."""

    def __init__(self, item_kind: str, item_id: str):
        self.item_kind = item_kind
        super().__init__(item_kind.capitalize(), item_id)


class InvalidVoteTypeError(DomainError):
    """Raised when a requested vote type is not one of -1, 0 or 1."""

    def __init__(self, vote_type: Any):
        self.vote_type = vote_type
        super().__init__(f"Invalid vote type: {vote_type!r}")


class DuplicateVoteError(DomainError):
    """Raised when a vote insert hits the unique (user, item) constraint.

    Signals a concurrent insert for the same vote slot; callers re-read
    and re-apply the transition.
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Vote already exists for {key}")


class StoreUnavailableError(DomainError):
    """Raised when the underlying store cannot be reached."""

    def __init__(self, operation: str, reason: str | None = None):
        self.operation = operation
        message = f"Store unavailable during {operation}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to modify content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to delete {resource} {resource_id}"
        )
