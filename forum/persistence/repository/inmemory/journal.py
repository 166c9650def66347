"""Undo journal giving the in-memory repositories transactional scopes.

Repositories record an undo action for every mutation they make. Inside
an undo scope the actions are collected; if the scope exits with an
exception they run in reverse order, otherwise they are handed to the
enclosing scope so an outer failure can still undo them. Outside any
scope mutations are final.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Callable, Iterator, Optional

UndoAction = Callable[[], None]

_undo_log: ContextVar[Optional[list[UndoAction]]] = ContextVar(
    "forum_inmemory_undo_log", default=None
)


def record_undo(action: UndoAction) -> None:
    """Register how to revert a mutation that was just made."""
    log = _undo_log.get()
    if log is not None:
        log.append(action)


@contextmanager
def undo_scope() -> Iterator[None]:
    """Open a (possibly nested) scope whose mutations revert on failure."""
    parent = _undo_log.get()
    log: list[UndoAction] = []
    token = _undo_log.set(log)
    try:
        yield
    except BaseException:
        for action in reversed(log):
            action()
        raise
    else:
        if parent is not None:
            parent.extend(log)
    finally:
        _undo_log.reset(token)
