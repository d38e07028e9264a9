"""Pending intent queue with a change counter."""
from __future__ import annotations

from dataclasses import dataclass, field

from .actions import NavAction
from .lock import Lock


@dataclass
class _QueueState:
    actions: list[NavAction] = field(default_factory=list)
    change_counter: int = 0


class IntentQueue:
    """FIFO buffer of intents waiting for the next reconciliation pass.

    Every enqueue bumps ``change_counter``; hosts watch the counter to know
    when a pass is due. ``drain_all`` hands back the whole batch at once and
    leaves the queue empty, so anything enqueued afterwards belongs to the
    next pass.
    """

    def __init__(self) -> None:
        self._state: Lock[_QueueState] = Lock(_QueueState())

    def enqueue(self, action: NavAction) -> int:
        """Append an intent.

        Returns:
            The new change counter value
        """

        def _append(state: _QueueState) -> int:
            state.actions.append(action)
            state.change_counter += 1
            return state.change_counter

        return self._state.with_lock(_append)

    def drain_all(self) -> list[NavAction]:
        def _take(state: _QueueState) -> tuple[_QueueState, list[NavAction]]:
            drained = state.actions
            return _QueueState(actions=[], change_counter=state.change_counter), drained

        return self._state.replace(_take)

    @property
    def change_counter(self) -> int:
        return self._state.with_lock(lambda state: state.change_counter)

    def __len__(self) -> int:
        return self._state.with_lock(lambda state: len(state.actions))
