"""Lifecycle observers notified by the router after each reconciliation."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Protocol, runtime_checkable

from .entry import NavEntry, make_entry


@runtime_checkable
class RouterDelegate(Protocol):
    """Hooks fired from the reconciler's dispatch step only.

    ``before_push`` may return a rewritten entry (for example with extra
    query parameters); returning ``None`` keeps the original.
    """

    def before_push(self, entry: NavEntry) -> NavEntry | None: ...

    def after_push(self, entry: NavEntry) -> None: ...

    def before_pop(self, entry: NavEntry) -> None: ...

    def after_pop(self, entry: NavEntry) -> None: ...


class DefaultRouterDelegate:
    """Identity/no-op implementation. Subclass and override what you need."""

    def before_push(self, entry: NavEntry) -> NavEntry | None:
        return entry

    def after_push(self, entry: NavEntry) -> None:
        pass

    def before_pop(self, entry: NavEntry) -> None:
        pass

    def after_pop(self, entry: NavEntry) -> None:
        pass


@dataclass
class CallbackDelegate(DefaultRouterDelegate):
    """Delegate built from optional plain callables instead of a subclass.

    Example:
        router.set_delegate(CallbackDelegate(after_push_fn=analytics.track))
    """

    before_push_fn: Callable[[NavEntry], NavEntry | None] | None = None
    after_push_fn: Callable[[NavEntry], None] | None = None
    before_pop_fn: Callable[[NavEntry], None] | None = None
    after_pop_fn: Callable[[NavEntry], None] | None = None

    def before_push(self, entry: NavEntry) -> NavEntry | None:
        if self.before_push_fn is None:
            return entry
        return self.before_push_fn(entry)

    def after_push(self, entry: NavEntry) -> None:
        if self.after_push_fn is not None:
            self.after_push_fn(entry)

    def before_pop(self, entry: NavEntry) -> None:
        if self.before_pop_fn is not None:
            self.before_pop_fn(entry)

    def after_pop(self, entry: NavEntry) -> None:
        if self.after_pop_fn is not None:
            self.after_pop_fn(entry)


@dataclass
class TraceDelegate(DefaultRouterDelegate):
    """Record every hook call as ``(event, entry)``; used by `replay`."""

    events: list[tuple[str, NavEntry]] = field(default_factory=list)

    def before_push(self, entry: NavEntry) -> NavEntry | None:
        self.events.append(("before_push", entry))
        return entry

    def after_push(self, entry: NavEntry) -> None:
        self.events.append(("after_push", entry))

    def before_pop(self, entry: NavEntry) -> None:
        self.events.append(("before_pop", entry))

    def after_pop(self, entry: NavEntry) -> None:
        self.events.append(("after_pop", entry))

    def on_finish_for(self, path: str, query: dict[str, str] | None = None) -> Callable[[], None]:
        """Callback that records an ``on_finish`` event for ``path``."""
        entry = make_entry(path, query)
        return lambda: self.events.append(("on_finish", entry))

    def names(self) -> list[tuple[str, str]]:
        return [(event, entry.path) for event, entry in self.events]

    def clear(self) -> None:
        self.events.clear()
