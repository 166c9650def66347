"""Translation of driver-level failures into domain errors."""

from contextlib import contextmanager
from typing import Iterator

import logfire
from sqlalchemy.exc import InterfaceError, OperationalError

from forum.domain.error import StoreUnavailableError


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Raise StoreUnavailableError when the database cannot be reached.

    Connection loss, timeouts and refused connections surface from
    SQLAlchemy as OperationalError or InterfaceError. Constraint
    violations are left alone for the caller to interpret.

    Args:
        operation: Name of the operation, used in the error message
    """
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        logfire.error("Store unavailable", operation=operation, error=str(e.orig))
        raise StoreUnavailableError(operation, str(e.orig)) from e
