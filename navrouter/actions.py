"""Structural intents queued on the router until the next reconciliation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .entry import NavEntry


@dataclass(frozen=True)
class Push:
    entry: NavEntry


@dataclass(frozen=True)
class Pop:
    pass


@dataclass(frozen=True)
class PopIfMatch:
    """Pop only if the current top matches ``entry`` (by path)."""

    entry: NavEntry


@dataclass(frozen=True)
class PopMultiIfMatch:
    """Pop ``len(entries)`` frames if the top of the stack, read top-down,
    equals ``entries`` (by path)."""

    entries: tuple[NavEntry, ...]


@dataclass(frozen=True)
class PopToRoot:
    pass


NavAction = Union[Push, Pop, PopIfMatch, PopMultiIfMatch, PopToRoot]
