"""Quiet-update dispatcher.

Runs the hidden update functions against a record and then restores the
database's changed-set, so whatever the callbacks did to the record is not
recorded as a change.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contactdb.core.types import Record
from contactdb.hidden_update.suppression import with_suppression
from contactdb.hooks.types import DEFAULT_CONTEXT, DispatchContext, HookList

if TYPE_CHECKING:
    from contactdb.core.database import ContactDatabase

logger = logging.getLogger(__name__)


class QuietUpdateDispatcher:
    """Runs the hidden update hook list for a database.

    The hidden list is separate from the database's notice hook list.
    Callbacks run through the database dispatcher, in registration order,
    and errors propagate.
    """

    def __init__(
        self,
        database: ContactDatabase,
        hook: HookList | None = None,
        suppress: bool = False,
    ):
        self.database = database
        self.hook = hook if hook is not None else HookList("hidden_update_functions")
        self.suppress = suppress

    def run_quiet_updates(
        self,
        record: Record,
        context: DispatchContext | None = None,
        *,
        suppress: bool | None = None,
    ) -> int:
        """Run every hidden update function against ``record``.

        The changed-set is snapshotted before the first callback and written
        back afterwards, also when a callback raises.

        Args:
            record: The record to update
            context: Dispatch context of the caller
            suppress: Also suppress change hooks while the callbacks run
                (defaults to the dispatcher's ``suppress`` setting)

        Returns:
            Number of callbacks invoked
        """
        context = context or DEFAULT_CONTEXT
        if suppress is None:
            suppress = self.suppress

        snapshot = self.database.changed_records
        try:
            if suppress:
                return with_suppression(
                    lambda quiet: self._run(record, quiet), context
                )
            return self._run(record, context)
        finally:
            self.database.changed_records = snapshot
            logger.debug(
                "Restored changed records after quiet updates for %r", record
            )

    def _run(self, record: Record, context: DispatchContext) -> int:
        logger.debug(
            "Running %d hidden update function(s) for %r", len(self.hook), record
        )
        return self.database.invoke(self.hook, record, context=context)
