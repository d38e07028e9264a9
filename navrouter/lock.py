"""Tiny mutual-exclusion wrapper around a single value."""
from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")


class Lock(Generic[T]):
    """Guard a value with a ``threading.Lock``.

    Mutation happens through ``with_lock`` so callers never hold a bare
    reference outside the critical section.
    """

    def __init__(self, value: T):
        self._value = value
        self._lock = threading.Lock()

    def with_lock(self, fn: Callable[[T], R]) -> R:
        with self._lock:
            return fn(self._value)

    def replace(self, fn: Callable[[T], tuple[T, R]]) -> R:
        """Swap the guarded value for ``fn(value)[0]`` and return ``fn(value)[1]``."""
        with self._lock:
            self._value, result = fn(self._value)
            return result

    def value(self) -> T:
        with self._lock:
            return self._value

    def set_value(self, value: T) -> None:
        with self._lock:
            self._value = value
