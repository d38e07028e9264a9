"""Navigation entries: one frame of the router stack."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Mapping


@dataclass(eq=False)
class NavEntry:
    """A single stack frame identified by ``path`` and ``query``.

    ``on_finish`` is not part of the entry's identity: two entries with the
    same path and query compare equal whatever their callbacks are.
    """

    path: str
    query: dict[str, str] = field(default_factory=dict)
    on_finish: Callable[[], None] | None = None
    _finished: bool = field(default=False, init=False, repr=False)

    def key(self) -> tuple[str, frozenset[tuple[str, str]]]:
        return self.path, frozenset(self.query.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NavEntry):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self) -> int:
        return hash(self.key())

    def finish(self) -> bool:
        """Run ``on_finish`` once.

        Returns:
            True if the callback ran on this call
        """
        if self._finished:
            return False
        self._finished = True
        if self.on_finish is None:
            return False
        self.on_finish()
        return True


def make_entry(
    path: str,
    query: Mapping[str, str] | None = None,
    on_finish: Callable[[], None] | None = None,
) -> NavEntry:
    """Build an entry, copying ``query`` so later caller edits don't leak in."""
    return NavEntry(path=str(path), query=dict(query or {}), on_finish=on_finish)


def coerce_entry(value: object) -> NavEntry:
    """Accept a NavEntry, a path string or a ``(path, query)`` tuple."""
    if isinstance(value, NavEntry):
        return value
    if isinstance(value, str):
        return make_entry(value)
    if isinstance(value, tuple) and len(value) == 2 and isinstance(value[0], str):
        path, query = value
        return make_entry(path, query)
    raise TypeError(f"Cannot build a navigation entry from {value!r}")
