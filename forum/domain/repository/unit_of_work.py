"""Unit of work interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager

from forum.domain.value import VoteKey


class UnitOfWork(ABC):
    """Atomic scopes spanning the vote and item stores.

    Work done inside a scope is either kept in full or rolled back in full
    when the scope exits with an exception. Scopes may be nested; an inner
    scope that fails rolls back only its own work.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic scope.

        Raises:
            StoreUnavailableError: If the store cannot be reached
        """
        pass

    @abstractmethod
    def serialized(self, key: VoteKey) -> AbstractAsyncContextManager[None]:
        """Open an atomic scope that is exclusive for one vote slot.

        Two scopes for the same (user, item) pair never overlap, so the
        read-transition-write sequence inside always sees the previous
        writer's result. Different pairs proceed in parallel.

        Args:
            key: The (user, item) vote slot to serialize on

        Raises:
            StoreUnavailableError: If the store cannot be reached
        """
        pass
