"""Suppression of change-tracking hooks.

A suppression scope is a DispatchContext with ``suppress_change_events``
set. ChangeSuppressionPolicy is the interceptor that honours it for the
database's change and after-change hook lists.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TypeVar

from contactdb.core.types import Record
from contactdb.hooks.types import DEFAULT_CONTEXT, DispatchContext, HookList

if TYPE_CHECKING:
    from contactdb.core.database import ContactDatabase

logger = logging.getLogger(__name__)

T = TypeVar("T")

CHANGE_HOOK_ATTRS = ("change_hook", "after_change_hook")


def with_suppression(
    fn: Callable[[DispatchContext], T],
    context: DispatchContext | None = None,
) -> T:
    """Run ``fn`` with change hooks suppressed.

    ``fn`` receives the suppressed context and must pass it on to any
    database call it makes. The caller's context is left untouched,
    whether ``fn`` returns or raises.
    """
    return fn((context or DEFAULT_CONTEXT).suppressed())


@contextmanager
def suppressing(context: DispatchContext | None = None) -> Iterator[DispatchContext]:
    """Context manager form of with_suppression.

    Usage:
        with suppressing(ctx) as quiet:
            db.set_field(record, "note", "seen", context=quiet)
    """
    yield (context or DEFAULT_CONTEXT).suppressed()


class ChangeSuppressionPolicy:
    """Skips the change hook lists while a suppression scope is active.

    The lists are looked up on the database at check time and compared by
    identity, so rebinding ``database.change_hook`` is tracked. A database
    without these attributes gets nothing suppressed.
    """

    def __init__(self, database: ContactDatabase):
        self.database = database
        self._warned = False

    def change_hooks(self) -> list[HookList]:
        hooks = []
        for attr in CHANGE_HOOK_ATTRS:
            bound = getattr(self.database, attr, None)
            if bound is None:
                if not self._warned:
                    logger.warning(
                        "Database has no '%s'; change hooks will not be suppressed",
                        attr,
                    )
                    self._warned = True
                continue
            hooks.append(bound)
        return hooks

    def should_suppress(self, hook: HookList, context: DispatchContext) -> bool:
        if not context.suppress_change_events:
            return False
        return any(hook is bound for bound in self.change_hooks())


def suppress_notice(
    proceed: Callable[[Record, tuple[Any, ...], DispatchContext], Any],
    record: Record,
    args: tuple[Any, ...],
    context: DispatchContext,
) -> Any:
    """Notice middleware: run the notice call inside a suppression scope."""
    return with_suppression(lambda quiet: proceed(record, args, quiet), context)
