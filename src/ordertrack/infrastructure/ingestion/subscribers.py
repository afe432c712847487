"""Copy-on-write registry of order listeners."""

from __future__ import annotations

import logging
import threading

from ordertrack.domain.events import OrderListener
from ordertrack.domain.model.order import Order

logger = logging.getLogger(__name__)


class SubscriberRegistry:
    """Listeners are kept in an immutable tuple that is swapped on change,
    so a notification in progress always iterates a stable snapshot."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: tuple[OrderListener, ...] = ()

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: OrderListener) -> None:
        with self._lock:
            self._listeners = (*self._listeners, listener)

    def unsubscribe(self, listener: OrderListener) -> None:
        with self._lock:
            listeners = list(self._listeners)
            if listener in listeners:
                listeners.remove(listener)
            self._listeners = tuple(listeners)

    def notify_discovered(self, orders: list[Order]) -> None:
        if not orders:
            return
        for listener in self._listeners:
            try:
                listener.on_orders_discovered(list(orders))
            except Exception:
                logger.exception("Error notifying listener %r of new orders", listener)

    def notify_reloaded(self, orders: list[Order]) -> None:
        for listener in self._listeners:
            try:
                listener.on_orders_reloaded(list(orders))
            except Exception:
                logger.exception("Error notifying listener %r of reload", listener)
