"""Listener that admits discovered orders as they arrive.

Runs on the owner thread (the pipeline only calls listeners from
``process_pending``), so it can touch the board directly.
"""

from __future__ import annotations

import logging
from typing import Callable

from ordertrack.application.admit_orders import AdmitOrdersHandler
from ordertrack.domain.events import OrderListener
from ordertrack.domain.model.order import Order

logger = logging.getLogger(__name__)


class AutoAdmitListener(OrderListener):

    def __init__(
        self,
        admit: AdmitOrdersHandler,
        on_admitted: Callable[[list[Order]], None] | None = None,
        on_reload: Callable[[list[Order]], None] | None = None,
        enabled: bool = True,
    ) -> None:
        self._admit = admit
        self._on_admitted = on_admitted
        self._on_reload = on_reload
        self.enabled = enabled

    def toggle(self) -> bool:
        """Flip auto-refresh; returns the new setting."""
        self.enabled = not self.enabled
        logger.info("Auto-refresh %s", "enabled" if self.enabled else "disabled")
        return self.enabled

    def on_orders_discovered(self, orders: list[Order]) -> None:
        if not self.enabled:
            logger.info("Auto-refresh disabled, ignoring %d discovered order(s)", len(orders))
            return
        admitted = self._admit.handle(orders)
        if admitted and self._on_admitted is not None:
            self._on_admitted(admitted)

    def on_orders_reloaded(self, orders: list[Order]) -> None:
        if self._on_reload is not None:
            self._on_reload(orders)
