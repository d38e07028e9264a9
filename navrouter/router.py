"""Navigation router: intent API over a reconciled stack."""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Mapping

from .actions import NavAction, Pop, PopIfMatch, PopMultiIfMatch, PopToRoot, Push
from .delegate import RouterDelegate
from .entry import NavEntry, coerce_entry, make_entry
from .queue import IntentQueue
from .reconcile import StackDelta, apply_actions, compute_delta, dispatch_delta

EntryLike = NavEntry | str | tuple[str, Mapping[str, str]]
ChangeListener = Callable[[int], None]


class Router:
    """Ordered navigation stack driven by queued intents.

    Intent methods (``push``, ``pop``, ...) never touch the stack. They queue
    an intent and bump ``change_counter``; the host then calls
    ``reconcile()`` once per batch, which applies every queued intent and
    fires the delegate hooks for the net change.

    All calls are expected to come from a single execution context (the UI
    thread of the host). Calling from elsewhere is not detected and gives
    undefined ordering.
    """

    def __init__(
        self,
        delegate: RouterDelegate | None = None,
        logger: logging.Logger | None = None,
    ):
        """Initialize an empty router.

        Args:
            delegate: Lifecycle observer, or None for identity/no-op hooks
            logger: Logger for no-op diagnostics (defaults to ``navrouter.router``)
        """
        self._stack: list[NavEntry] = []
        self._queue = IntentQueue()
        self._delegate = delegate
        self._listeners: list[ChangeListener] = []
        self.logger = logger or logging.getLogger("navrouter.router")

    # ── intents ───────────────────────────────────────────────────────────

    def push(
        self,
        path: EntryLike,
        query: Mapping[str, str] | None = None,
        on_finish: Callable[[], None] | None = None,
    ) -> None:
        self._enqueue(Push(self._entry(path, query, on_finish)))

    def pop(self) -> None:
        self._enqueue(Pop())

    def pop_if_match(self, path: EntryLike) -> None:
        """Pop if the top entry has the same path as ``path``."""
        self._enqueue(PopIfMatch(self._match_entry(path)))

    def pop_multi_if_match(self, paths: Iterable[EntryLike]) -> None:
        """Pop several entries if the stack, read from the top, matches ``paths``.

        ``paths[0]`` is compared against the current top, ``paths[1]`` against
        the entry below it, and so on.
        """
        entries = tuple(self._match_entry(path) for path in paths)
        self._enqueue(PopMultiIfMatch(entries))

    def pop_to_root(self) -> None:
        self._enqueue(PopToRoot())

    def replace(
        self,
        path: EntryLike,
        query: Mapping[str, str] | None = None,
        on_finish: Callable[[], None] | None = None,
    ) -> None:
        """Queue a pop followed by a push."""
        entry = self._entry(path, query, on_finish)
        self.pop()
        self._enqueue(Push(entry))

    # ── reconciliation ────────────────────────────────────────────────────

    def reconcile(self) -> StackDelta:
        """Run one reconciliation pass.

        Drains the queue, applies every intent, then notifies the delegate
        about the difference between the old and new stack. Intents queued
        from inside callbacks wait for the next pass.
        """
        actions = self._queue.drain_all()
        if not actions:
            return StackDelta(common=len(self._stack))
        new_stack = apply_actions(self._stack, actions, self.logger)
        return self._adopt(new_stack)

    def sync_displayed(self, entries: Iterable[EntryLike]) -> StackDelta:
        """Adopt a stack the host changed on its own (e.g. a back swipe)."""
        return self._adopt([_frame(coerce_entry(entry)) for entry in entries])

    def _adopt(self, new_stack: list[NavEntry]) -> StackDelta:
        old_stack = self._stack
        delta = compute_delta(old_stack, new_stack)
        if delta.is_empty:
            return delta
        # Surviving frames keep their own callbacks; removed frames are off
        # the stack before any hook runs.
        self._stack = old_stack[: delta.common] + delta.added
        shown = dispatch_delta(delta, self._delegate)
        self._stack[delta.common : delta.common + len(shown)] = shown
        self.logger.debug(
            "nav stack reconciled: -%d +%d -> %s",
            len(delta.removed),
            len(delta.added),
            [entry.path for entry in self._stack],
        )
        return delta

    # ── state ─────────────────────────────────────────────────────────────

    @property
    def stack(self) -> tuple[NavEntry, ...]:
        return tuple(self._stack)

    @property
    def top(self) -> NavEntry | None:
        return self._stack[-1] if self._stack else None

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def is_empty(self) -> bool:
        return not self._stack

    @property
    def is_root(self) -> bool:
        return not self._stack

    @property
    def change_counter(self) -> int:
        return self._queue.change_counter

    @property
    def pending(self) -> int:
        return len(self._queue)

    @property
    def delegate(self) -> RouterDelegate | None:
        return self._delegate

    def set_delegate(self, delegate: RouterDelegate | None) -> None:
        self._delegate = delegate

    def add_change_listener(self, listener: ChangeListener) -> None:
        """Call ``listener(counter)`` after every queued intent."""
        self._listeners.append(listener)

    def remove_change_listener(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ── helpers ───────────────────────────────────────────────────────────

    def _enqueue(self, action: NavAction) -> None:
        counter = self._queue.enqueue(action)
        for listener in list(self._listeners):
            listener(counter)

    @staticmethod
    def _entry(
        path: EntryLike,
        query: Mapping[str, str] | None,
        on_finish: Callable[[], None] | None,
    ) -> NavEntry:
        if isinstance(path, str):
            return make_entry(path, query, on_finish)
        entry = coerce_entry(path)
        # Every push is its own frame, even when the caller reuses an entry.
        return make_entry(
            entry.path,
            entry.query if query is None else query,
            entry.on_finish if on_finish is None else on_finish,
        )

    @staticmethod
    def _match_entry(path: EntryLike) -> NavEntry:
        # Tuple forms only contribute their path to matching.
        if isinstance(path, tuple):
            return make_entry(coerce_entry(path).path)
        return coerce_entry(path)


def _frame(entry: NavEntry) -> NavEntry:
    return make_entry(entry.path, entry.query, entry.on_finish)
