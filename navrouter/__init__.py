"""navrouter: a navigation stack reconciled from queued intents."""

from .actions import NavAction, Pop, PopIfMatch, PopMultiIfMatch, PopToRoot, Push
from .delegate import CallbackDelegate, DefaultRouterDelegate, RouterDelegate, TraceDelegate
from .entry import NavEntry, coerce_entry, make_entry
from .lock import Lock
from .queue import IntentQueue
from .reconcile import StackDelta, apply_actions, compute_delta, dispatch_delta
from .router import Router

__all__ = [
    "CallbackDelegate",
    "DefaultRouterDelegate",
    "IntentQueue",
    "Lock",
    "NavAction",
    "NavEntry",
    "Pop",
    "PopIfMatch",
    "PopMultiIfMatch",
    "PopToRoot",
    "Push",
    "Router",
    "RouterDelegate",
    "StackDelta",
    "TraceDelegate",
    "apply_actions",
    "coerce_entry",
    "compute_delta",
    "dispatch_delta",
    "make_entry",
]
