"""Host-side glue: schedules reconciliation and plays the display's role."""
from __future__ import annotations

import logging
from typing import Mapping

from ..reconcile import StackDelta
from ..router import Router

logger = logging.getLogger(__name__)


class StackHost:
    """Minimal display host for a Router.

    Mirrors what a view layer does around the router:
    - watches the change counter and reconciles once per batch (``pump``)
    - lets the "user" pop the displayed stack directly (``back_gesture``)
    - renders breadcrumbs for the current stack
    """

    def __init__(self, router: Router | None = None, max_passes: int = 16):
        self.router = router or Router()
        self.max_passes = max(1, max_passes)
        self._seen = self.router.change_counter
        self._dirty = False
        self.router.add_change_listener(self._on_change)

    def _on_change(self, counter: int) -> None:
        self._dirty = counter != self._seen

    @property
    def dirty(self) -> bool:
        """True if intents were queued since the last pump."""
        return self._dirty

    def pump(self) -> StackDelta | None:
        """Reconcile if the counter moved; returns the last non-empty delta.

        Callbacks may queue more intents during a pass; those get their own
        pass, up to ``max_passes`` in a row.
        """
        if not self._dirty:
            return None

        last: StackDelta | None = None
        passes = 0
        while self._dirty:
            if passes >= self.max_passes:
                logger.warning(
                    "stopping after %d reconciliation passes, %d intents still pending",
                    passes,
                    self.router.pending,
                )
                break
            self._seen = self.router.change_counter
            self._dirty = False
            delta = self.router.reconcile()
            passes += 1
            if not delta.is_empty or last is None:
                last = delta
        return last

    def back_gesture(self) -> StackDelta | None:
        """Drop the displayed top entry without going through the intent queue."""
        displayed = list(self.router.stack)
        if not displayed:
            logger.debug("back gesture on empty stack ignored")
            return None
        displayed.pop()
        return self.router.sync_displayed(displayed)

    def breadcrumbs(
        self,
        labels: Mapping[str, str] | None = None,
        root_label: str = "Home",
    ) -> str:
        """Breadcrumb string like "Home > Sources > Add Source"."""
        labels = labels or {}
        parts = [root_label]
        parts.extend(labels.get(entry.path, entry.path) for entry in self.router.stack)
        return " > ".join(parts)
