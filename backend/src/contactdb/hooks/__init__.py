"""contactdb hook system.

Provides the hook lists a contact database fires:
- notice: a record was observed (e.g., while scanning a message)
- change: a stored field was modified through the tracked setter
- after_change: after a tracked change has been bookkept

Usage:
    from contactdb.hooks import hook, HookContext

    @hook("tagSource")
    def tag_source(ctx: HookContext) -> None:
        ctx.set_field_quietly("source", "mail")
"""

from datetime import datetime, timezone

from contactdb.hooks.registry import HookRegistry, hook
from contactdb.hooks.service import HookDispatcher
from contactdb.hooks.types import (
    DEFAULT_CONTEXT,
    DispatchContext,
    HookContext,
    HookFn,
    HookList,
    Interceptor,
)

HOOK_NAMES = ("notice", "change", "after_change")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def update_timestamp(ctx: HookContext) -> None:
    """Change hook: stamp the record with the time of the change."""
    ctx.record.timestamp = _now()


def record_last_seen(ctx: HookContext) -> None:
    """Hidden update: remember when the record was last noticed."""
    ctx.set_field("last_seen", _now())


def register_builtin_hooks() -> None:
    """Register framework-provided hooks under their configuration names."""
    HookRegistry.register("updateTimestamp", update_timestamp)
    HookRegistry.register("recordLastSeen", record_last_seen)


__all__ = [
    "DEFAULT_CONTEXT",
    "DispatchContext",
    "HOOK_NAMES",
    "HookContext",
    "HookDispatcher",
    "HookFn",
    "HookList",
    "HookRegistry",
    "Interceptor",
    "hook",
    "record_last_seen",
    "register_builtin_hooks",
    "update_timestamp",
]
