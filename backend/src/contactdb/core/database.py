"""In-memory contact database with hook-driven change tracking."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from contactdb.core.types import Record
from contactdb.hooks import (
    DEFAULT_CONTEXT,
    DispatchContext,
    HookDispatcher,
    HookList,
    update_timestamp,
)

logger = logging.getLogger(__name__)

NOTICE_CONTEXT = DispatchContext(source="notice")

# Notice middleware signature: (proceed, record, args, context) -> Any
# where proceed is (record, args, context) -> Any
NoticeProceed = Callable[[Record, tuple[Any, ...], DispatchContext], Any]
NoticeMiddleware = Callable[
    [NoticeProceed, Record, tuple[Any, ...], DispatchContext], Any
]


class ContactDatabase:
    """Holds contact records and the hook lists fired for them.

    The hook lists are plain attributes and may be rebound at runtime.
    ``changed_records`` is the set of records modified through the tracked
    setter since the last save; it is always replaced, never mutated.
    """

    def __init__(self, abbreviation: str = "CON"):
        self.abbreviation = abbreviation
        self.notice_hook = HookList("notice")
        self.change_hook = HookList("change", [update_timestamp])
        self.after_change_hook = HookList("after_change")
        self.changed_records: tuple[Record, ...] = ()
        self.dispatcher = HookDispatcher(self)
        self.extensions: dict[str, Any] = {}
        self._records: dict[str, Record] = {}
        self._notice_middleware: list[NoticeMiddleware] = []
        self._sequence = 0

    # ── Records ─────────────────────────────────────────────────────────────

    def create_record(self, name: str, **fields: Any) -> Record:
        """Create a record. Creation is not a tracked change."""
        self._sequence += 1
        record_id = f"{self.abbreviation}-{self._sequence:05d}"
        record = Record(record_id=record_id, name=name, fields=dict(fields))
        self._records[record_id] = record
        return record

    def get_record(self, record_id: str) -> Record | None:
        return self._records.get(record_id)

    @property
    def records(self) -> list[Record]:
        return list(self._records.values())

    def is_changed(self, record: Record) -> bool:
        return any(r is record for r in self.changed_records)

    # ── Setters ─────────────────────────────────────────────────────────────

    def set_field(
        self,
        record: Record,
        name: str,
        value: Any,
        context: DispatchContext | None = None,
    ) -> None:
        """Tracked update: runs change hooks and marks the record dirty."""
        context = context or DEFAULT_CONTEXT
        record.assign(name, value)
        self.invoke(self.change_hook, record, name, value, context=context)
        if not self.is_changed(record):
            self.changed_records = self.changed_records + (record,)
        self.invoke(self.after_change_hook, record, name, value, context=context)

    def set_field_quietly(self, record: Record, name: str, value: Any) -> None:
        """Untracked update: no hooks, no dirty bookkeeping."""
        record.assign(name, value)

    def save(self) -> tuple[Record, ...]:
        """Mark every changed record clean and return them."""
        saved = self.changed_records
        self.changed_records = ()
        logger.debug("Saved %d changed record(s)", len(saved))
        return saved

    # ── Hooks ───────────────────────────────────────────────────────────────

    def invoke(
        self,
        hook: HookList,
        record: Record,
        *args: Any,
        context: DispatchContext | None = None,
    ) -> int:
        return self.dispatcher.invoke(hook, record, *args, context=context)

    def wrap_notice(self, middleware: NoticeMiddleware) -> bool:
        """Install notice middleware. The last installed runs outermost.

        Idempotent by identity.
        """
        if any(m is middleware for m in self._notice_middleware):
            return False
        self._notice_middleware.append(middleware)
        return True

    def unwrap_notice(self, middleware: NoticeMiddleware) -> bool:
        for index, existing in enumerate(self._notice_middleware):
            if existing is middleware:
                del self._notice_middleware[index]
                return True
        return False

    def notice(
        self,
        record: Record,
        *args: Any,
        context: DispatchContext | None = None,
    ) -> Any:
        """Signal that a record was observed and run the notice hook."""

        def innermost(rec: Record, rest: tuple[Any, ...], ctx: DispatchContext) -> Any:
            return self.invoke(self.notice_hook, rec, *rest, context=ctx)

        proceed: NoticeProceed = innermost
        for middleware in self._notice_middleware:
            proceed = _bind(middleware, proceed)

        return proceed(record, args, context or NOTICE_CONTEXT)


def _bind(middleware: NoticeMiddleware, proceed: NoticeProceed) -> NoticeProceed:
    def step(record: Record, args: tuple[Any, ...], context: DispatchContext) -> Any:
        return middleware(proceed, record, args, context)

    return step
