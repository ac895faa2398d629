"""Hidden update extension for a ContactDatabase.

Wires the pieces into a database:
- a trigger on the notice hook that runs the quiet-update dispatcher
- the change suppression policy on the database dispatcher
- notice middleware that suppresses change hooks for the notice call
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contactdb.hidden_update.config import HiddenUpdateConfig
from contactdb.hidden_update.quiet import QuietUpdateDispatcher
from contactdb.hidden_update.suppression import (
    ChangeSuppressionPolicy,
    suppress_notice,
)
from contactdb.hooks.types import HookContext, HookFn, HookList

if TYPE_CHECKING:
    from contactdb.core.database import ContactDatabase

logger = logging.getLogger(__name__)

EXTENSION_NAME = "hidden_update"


class HiddenUpdate:
    """Hidden update extension state for one database."""

    def __init__(
        self,
        database: ContactDatabase,
        config: HiddenUpdateConfig | None = None,
    ):
        self.database = database
        self.config = config or HiddenUpdateConfig()
        self.policy = ChangeSuppressionPolicy(database)
        self.quiet = QuietUpdateDispatcher(
            database, suppress=self.config.suppress_during_updates
        )
        self.installed = False

        # Created once so that the notice hook sees a stable identity
        def run_hidden_updates(ctx: HookContext) -> None:
            self.quiet.run_quiet_updates(ctx.record, ctx.dispatch)

        self.trigger: HookFn = run_hidden_updates

    @property
    def functions(self) -> HookList:
        """The hidden update functions, in the order they run."""
        return self.quiet.hook

    def add_function(self, fn: HookFn) -> bool:
        return self.functions.add(fn)

    def remove_function(self, fn: HookFn) -> bool:
        return self.functions.remove(fn)

    def initialize(self) -> None:
        """Register the notice trigger and suppression. Idempotent."""
        for fn in self.config.resolve_functions():
            self.functions.add(fn)

        self.database.dispatcher.add_interceptor(self.policy)
        if self.config.suppress_on_notice:
            self.database.wrap_notice(suppress_notice)
        added = self.database.notice_hook.add(self.trigger)

        if added:
            logger.info(
                "Hidden updates installed (%d function(s))", len(self.functions)
            )
        self.installed = True

    def uninstall(self) -> None:
        """Undo every registration made by initialize()."""
        self.database.notice_hook.remove(self.trigger)
        self.database.unwrap_notice(suppress_notice)
        self.database.dispatcher.remove_interceptor(self.policy)
        self.installed = False
        logger.info("Hidden updates uninstalled")


def initialize_hidden_update(
    database: ContactDatabase,
    config: HiddenUpdateConfig | None = None,
) -> HiddenUpdate:
    """Install hidden updates on a database.

    Reuses the extension already attached to the database, so calling this
    more than once registers the notice trigger only once. ``config`` only
    applies when the extension is created.
    """
    extension = database.extensions.get(EXTENSION_NAME)
    if extension is None:
        extension = HiddenUpdate(database, config)
        database.extensions[EXTENSION_NAME] = extension
    extension.initialize()
    return extension
