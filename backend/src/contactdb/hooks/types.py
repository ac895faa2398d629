"""Hook system types for contactdb.

Defines the core data structures for hook dispatch:
- HookList: a named, ordered list of callbacks owned by the database
- DispatchContext: per-call dispatch state threaded through host calls
- HookContext: runtime state passed to hook callbacks
- Interceptor: policy consulted before a hook list is run
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from contactdb.core.database import ContactDatabase
    from contactdb.core.types import Record

# Hook function signature: (HookContext) -> None
HookFn = Callable[["HookContext"], Any]


class HookList:
    """An ordered list of hook callbacks.

    Registration behaves like a set keyed by identity: adding a callback
    that is already present is a no-op. Hook lists are compared by
    identity too, so two lists with the same name are distinct events.
    """

    def __init__(self, name: str, callbacks: list[HookFn] | None = None):
        self.name = name
        self._callbacks: list[HookFn] = []
        for callback in callbacks or []:
            self.add(callback)

    def add(self, callback: HookFn, append: bool = True) -> bool:
        """Register a callback.

        Args:
            callback: Function taking a HookContext
            append: Add to the end of the list (default) or the front

        Returns:
            True if the callback was added, False if already registered
        """
        if self.contains(callback):
            return False
        if append:
            self._callbacks.append(callback)
        else:
            self._callbacks.insert(0, callback)
        return True

    def remove(self, callback: HookFn) -> bool:
        """Unregister a callback. Returns False if it was not registered."""
        for index, existing in enumerate(self._callbacks):
            if existing is callback:
                del self._callbacks[index]
                return True
        return False

    def contains(self, callback: HookFn) -> bool:
        return any(existing is callback for existing in self._callbacks)

    def clear(self) -> None:
        self._callbacks.clear()

    @property
    def callbacks(self) -> tuple[HookFn, ...]:
        """Snapshot of the registered callbacks, in registration order."""
        return tuple(self._callbacks)

    def __len__(self) -> int:
        return len(self._callbacks)

    def __repr__(self) -> str:
        return f"HookList({self.name!r}, {len(self._callbacks)} callbacks)"


@dataclass(frozen=True)
class DispatchContext:
    """Dispatch state for one call into the database.

    Contexts are immutable. Entering a suppression scope produces a new
    context, so the caller's context is unchanged once the scope exits.

    Attributes:
        suppress_change_events: Skip the change and after-change hook lists
        source: Free-form label for the operation that created the context
    """

    suppress_change_events: bool = False
    source: str | None = None

    def suppressed(self) -> DispatchContext:
        if self.suppress_change_events:
            return self
        return replace(self, suppress_change_events=True)


DEFAULT_CONTEXT = DispatchContext()


@dataclass
class HookContext:
    """Runtime context passed to every hook callback.

    Attributes:
        database: The database that owns the hook list
        record: The record the hook is invoked for
        hook: The hook list being run
        dispatch: The dispatch context active for this invocation
        args: Extra positional arguments given to invoke()
    """

    database: ContactDatabase
    record: Record
    hook: HookList
    dispatch: DispatchContext = DEFAULT_CONTEXT
    args: tuple[Any, ...] = field(default_factory=tuple)

    def set_field(self, name: str, value: Any) -> None:
        """Tracked update of the current record under the active context."""
        self.database.set_field(self.record, name, value, context=self.dispatch)

    def set_field_quietly(self, name: str, value: Any) -> None:
        """Untracked update of the current record."""
        self.database.set_field_quietly(self.record, name, value)


class Interceptor(Protocol):
    """Policy consulted by the dispatcher before running a hook list."""

    def should_suppress(self, hook: HookList, context: DispatchContext) -> bool:
        """Return True to skip every callback of ``hook`` for this call."""
        ...
