"""Hook dispatch service for contactdb.

Runs hook lists against records, consulting a chain of interceptors
before any callback executes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from contactdb.hooks.types import (
    DEFAULT_CONTEXT,
    DispatchContext,
    HookContext,
    HookList,
    Interceptor,
)

if TYPE_CHECKING:
    from contactdb.core.database import ContactDatabase
    from contactdb.core.types import Record

logger = logging.getLogger(__name__)


class HookDispatcher:
    """Dispatches hook lists for one database.

    Callbacks within a hook list execute sequentially in registration
    order. A callback error propagates to the caller and the remaining
    callbacks do not run.
    """

    def __init__(self, database: ContactDatabase):
        self.database = database
        self._interceptors: list[Interceptor] = []

    def add_interceptor(self, interceptor: Interceptor) -> bool:
        """Install an interceptor. Idempotent by identity."""
        if any(existing is interceptor for existing in self._interceptors):
            return False
        self._interceptors.append(interceptor)
        return True

    def remove_interceptor(self, interceptor: Interceptor) -> bool:
        for index, existing in enumerate(self._interceptors):
            if existing is interceptor:
                del self._interceptors[index]
                return True
        return False

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        return tuple(self._interceptors)

    def is_suppressed(self, hook: HookList, context: DispatchContext) -> bool:
        return any(i.should_suppress(hook, context) for i in self._interceptors)

    def invoke(
        self,
        hook: HookList,
        record: Record,
        *args: Any,
        context: DispatchContext | None = None,
    ) -> int:
        """Run every callback of a hook list against a record.

        Args:
            hook: The hook list to run
            record: The record passed to each callback
            *args: Extra arguments exposed as HookContext.args
            context: Dispatch context for this call

        Returns:
            Number of callbacks invoked (0 when an interceptor suppressed
            the hook list)
        """
        context = context or DEFAULT_CONTEXT

        if self.is_suppressed(hook, context):
            logger.debug(
                "Suppressed hook '%s' for %r (source: %s)",
                hook.name,
                record,
                context.source,
            )
            return 0

        ctx = HookContext(
            database=self.database,
            record=record,
            hook=hook,
            dispatch=context,
            args=args,
        )
        count = 0
        for callback in hook.callbacks:
            callback(ctx)
            count += 1
        return count
