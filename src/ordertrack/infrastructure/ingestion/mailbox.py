"""The "post to owner thread" primitive.

Any thread may ``post`` an event; only the thread that owns the board
calls ``pump``, which hands queued events to a dispatch function.
"""

from __future__ import annotations

import queue
from typing import Callable

from ordertrack.domain.events import OrderEvent


class OwnerThreadMailbox:

    def __init__(self) -> None:
        self._queue: queue.Queue[OrderEvent] = queue.Queue()

    def post(self, event: OrderEvent) -> None:
        self._queue.put(event)

    def pending(self) -> int:
        return self._queue.qsize()

    def pump(
        self,
        dispatch: Callable[[OrderEvent], None],
        timeout: float | None = 0.0,
    ) -> int:
        """Deliver queued events to *dispatch* on the calling thread.

        Waits up to *timeout* seconds for the first event (``None`` blocks
        until one arrives, ``0`` never waits), then drains whatever else is
        already queued.  Returns the number of events delivered.
        """
        try:
            if timeout == 0:
                event = self._queue.get_nowait()
            else:
                event = self._queue.get(timeout=timeout)
        except queue.Empty:
            return 0

        delivered = 0
        while True:
            dispatch(event)
            delivered += 1
            try:
                event = self._queue.get_nowait()
            except queue.Empty:
                return delivered
