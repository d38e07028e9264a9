"""Reconciliation: apply queued intents, then diff and notify.

Notifications are derived from the diff alone, so a stack the host changed
directly (a back swipe) is reported the same way as a queued pop.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .actions import NavAction, Pop, PopIfMatch, PopMultiIfMatch, PopToRoot, Push
from .delegate import DefaultRouterDelegate, RouterDelegate
from .entry import NavEntry

logger = logging.getLogger(__name__)

_DEFAULT_DELEGATE = DefaultRouterDelegate()


@dataclass
class StackDelta:
    """Entries that left and joined the stack across one pass.

    Both lists are in stack order (bottom to top).
    """

    common: int = 0
    removed: list[NavEntry] = field(default_factory=list)
    added: list[NavEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.removed and not self.added


def apply_actions(
    stack: Sequence[NavEntry],
    actions: Iterable[NavAction],
    log: logging.Logger | None = None,
) -> list[NavEntry]:
    """Apply ``actions`` in order to a copy of ``stack`` and return it."""
    log = log or logger
    result = list(stack)
    for action in actions:
        if isinstance(action, Push):
            result.append(action.entry)
        elif isinstance(action, Pop):
            if result:
                result.pop()
            else:
                log.debug("nav stack is empty, pop ignored")
        elif isinstance(action, PopIfMatch):
            _pop_multi_if_match(result, (action.entry,), log)
        elif isinstance(action, PopMultiIfMatch):
            _pop_multi_if_match(result, action.entries, log)
        elif isinstance(action, PopToRoot):
            result.clear()
        else:
            raise TypeError(f"Unknown navigation action: {action!r}")
    return result


def _pop_multi_if_match(
    stack: list[NavEntry],
    entries: Sequence[NavEntry],
    log: logging.Logger,
) -> None:
    # Only paths are compared here; query is ignored (unlike the diff).
    count = len(entries)
    if count == 0:
        return
    suffix = [entry.path for entry in stack[-count:]]
    target = [entry.path for entry in reversed(entries)]
    if len(stack) >= count and suffix == target:
        del stack[-count:]
    else:
        log.debug("nav stack does not match, nothing popped (suffix=%s, target=%s)", suffix, target)


def compute_delta(old: Sequence[NavEntry], new: Sequence[NavEntry]) -> StackDelta:
    """Diff two stacks by longest common prefix, comparing ``(path, query)``."""
    common = 0
    for before, after in zip(old, new):
        if before != after:
            break
        common += 1
    return StackDelta(common=common, removed=list(old[common:]), added=list(new[common:]))


def dispatch_delta(delta: StackDelta, delegate: RouterDelegate | None = None) -> list[NavEntry]:
    """Fire lifecycle hooks for ``delta``.

    Removals are notified top-most first, additions bottom-most first.

    Returns:
        The added entries as returned by ``before_push``
    """
    delegate = delegate or _DEFAULT_DELEGATE

    removed = list(reversed(delta.removed))
    for entry in removed:
        delegate.before_pop(entry)
    for entry in removed:
        entry.finish()
        delegate.after_pop(entry)

    processed: list[NavEntry] = []
    for entry in delta.added:
        shown = delegate.before_push(entry) or entry
        if shown is not entry and shown.on_finish is None:
            shown.on_finish = entry.on_finish
        delegate.after_push(shown)
        processed.append(shown)
    return processed
