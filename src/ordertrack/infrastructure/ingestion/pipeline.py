"""The ingestion pipeline: one object per process tying together the
ledger, the listener registry, the owner-thread mailbox, the one-shot
scanner and the background watcher.

Threading contract: ``scan_once``, ``process_pending``, ``reset_ledger``
and the watcher lifecycle calls belong to the owner thread.  Listeners
are only ever invoked from ``process_pending``.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from pathlib import Path

from ordertrack.domain.events import (
    OrderEvent,
    OrderListener,
    OrdersDiscovered,
    OrdersReloaded,
)
from ordertrack.domain.model.order import Order
from ordertrack.infrastructure.ingestion.filenames import RESERVED_FILENAMES
from ordertrack.infrastructure.ingestion.ledger import ProcessedFileLedger
from ordertrack.infrastructure.ingestion.mailbox import OwnerThreadMailbox
from ordertrack.infrastructure.ingestion.scanner import DEFAULT_FALLBACK_DIRS, DirectoryScanner
from ordertrack.infrastructure.ingestion.subscribers import SubscriberRegistry
from ordertrack.infrastructure.ingestion.watcher import OrderWatcher, WatcherState, WatchMode
from ordertrack.infrastructure.parsing.order_file_reader import OrderFileReader

logger = logging.getLogger(__name__)


class OrderIngestionPipeline:

    def __init__(
        self,
        reader: OrderFileReader | None = None,
        *,
        watch_mode: WatchMode = WatchMode.AUTO,
        poll_interval: float = 2.0,
        settle_delay: float = 0.1,
        fallback_dirs: Sequence[Path] = DEFAULT_FALLBACK_DIRS,
        reserved: Collection[str] = RESERVED_FILENAMES,
    ) -> None:
        reader = reader or OrderFileReader()
        self.ledger = ProcessedFileLedger()
        self._registry = SubscriberRegistry()
        self._mailbox = OwnerThreadMailbox()
        self._scanner = DirectoryScanner(reader, self.ledger, fallback_dirs, reserved)
        self._watcher = OrderWatcher(
            reader,
            self.ledger,
            self._mailbox,
            mode=watch_mode,
            poll_interval=poll_interval,
            settle_delay=settle_delay,
            reserved=reserved,
        )

    # --- Subscribers ----------------------------------------------------------

    def subscribe(self, listener: OrderListener) -> None:
        self._registry.subscribe(listener)

    def unsubscribe(self, listener: OrderListener) -> None:
        self._registry.unsubscribe(listener)

    # --- Scanning -------------------------------------------------------------

    def scan_once(self, directory: Path) -> list[Order]:
        return self._scanner.scan(directory)

    def reset_ledger(self) -> None:
        self.ledger.reset()

    # --- Watching -------------------------------------------------------------

    def start_watching(self, directory: Path, mode: WatchMode | None = None) -> bool:
        return self._watcher.start(directory, mode)

    def stop_watching(self) -> None:
        self._watcher.stop()

    def join_watcher(self, timeout: float | None = None) -> None:
        self._watcher.join(timeout)

    @property
    def watch_state(self) -> WatcherState:
        return self._watcher.state

    @property
    def watch_strategy(self) -> str | None:
        return self._watcher.strategy_name

    # --- Delivery -------------------------------------------------------------

    def notify_reloaded(self, all_orders: list[Order]) -> None:
        """Queue a full-resync signal for the listeners."""
        self._mailbox.post(OrdersReloaded(orders=tuple(all_orders)))

    def process_pending(self, timeout: float | None = 0.0) -> int:
        """Deliver queued events to listeners on the calling (owner) thread."""
        return self._mailbox.pump(self._dispatch, timeout)

    def _dispatch(self, event: OrderEvent) -> None:
        if isinstance(event, OrdersDiscovered):
            if event.source_file is not None and not self.ledger.commit(event.source_file):
                logger.info(
                    "Dropping %d order(s) from %s: file already processed",
                    len(event.orders),
                    event.source_file,
                )
                return
            self._registry.notify_discovered(list(event.orders))
        elif isinstance(event, OrdersReloaded):
            self._registry.notify_reloaded(list(event.orders))
