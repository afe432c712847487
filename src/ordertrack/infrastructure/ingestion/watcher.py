"""Background watcher for the uploads directory.

Lifecycle: STOPPED -> STARTING -> RUNNING -> STOPPED.  Only one run is
active at a time.  The receive loop lives on a daemon thread and never
touches the board or the ledger's processed set; every discovered batch
is posted to the owner-thread mailbox instead.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Collection
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ordertrack.domain.events import OrdersDiscovered
from ordertrack.infrastructure.ingestion.filenames import RESERVED_FILENAMES, is_order_file
from ordertrack.infrastructure.ingestion.ledger import ProcessedFileLedger
from ordertrack.infrastructure.ingestion.mailbox import OwnerThreadMailbox
from ordertrack.infrastructure.ingestion.strategies import (
    NativeWatchStrategy,
    PollingWatchStrategy,
    WatchStrategy,
)
from ordertrack.infrastructure.parsing.order_file_reader import OrderFileReader

logger = logging.getLogger(__name__)

WATCHER_THREAD_NAME = "order-file-watcher"


class WatcherState(Enum):
    STOPPED = "STOPPED"
    STARTING = "STARTING"
    RUNNING = "RUNNING"


class WatchMode(Enum):
    AUTO = "auto"  # native events, polling if they are unavailable
    NATIVE = "native"
    POLLING = "polling"


@dataclass
class _WatchRun:
    directory: Path
    strategy: WatchStrategy
    stop_event: threading.Event = field(default_factory=threading.Event)
    thread: threading.Thread | None = None


class OrderWatcher:

    def __init__(
        self,
        reader: OrderFileReader,
        ledger: ProcessedFileLedger,
        mailbox: OwnerThreadMailbox,
        mode: WatchMode = WatchMode.AUTO,
        poll_interval: float = 2.0,
        settle_delay: float = 0.1,
        reserved: Collection[str] = RESERVED_FILENAMES,
    ) -> None:
        self._reader = reader
        self._ledger = ledger
        self._mailbox = mailbox
        self._mode = mode
        self._poll_interval = poll_interval
        self._settle_delay = settle_delay
        self._reserved = reserved

        self._lock = threading.Lock()
        self._state = WatcherState.STOPPED
        self._run: _WatchRun | None = None
        self._last_thread: threading.Thread | None = None

    # --- Status ---------------------------------------------------------------

    @property
    def state(self) -> WatcherState:
        with self._lock:
            return self._state

    @property
    def is_running(self) -> bool:
        return self.state is WatcherState.RUNNING

    @property
    def strategy_name(self) -> str | None:
        with self._lock:
            return self._run.strategy.name if self._run is not None else None

    # --- Lifecycle ------------------------------------------------------------

    def start(self, directory: Path, mode: WatchMode | None = None) -> bool:
        """Begin watching *directory*. Returns False if a run is already active."""
        with self._lock:
            if self._state is not WatcherState.STOPPED:
                logger.info("File watcher is already running")
                return False
            self._state = WatcherState.STARTING

        try:
            if not directory.exists():
                directory.mkdir(parents=True, exist_ok=True)
                logger.info("Created directory: %s", directory.resolve())
            strategy = self._open_strategy(directory, mode or self._mode)
        except OSError as exc:
            logger.error("Cannot watch %s: %s", directory, exc)
            with self._lock:
                self._state = WatcherState.STOPPED
            return False

        run = _WatchRun(directory=directory, strategy=strategy)
        run.thread = threading.Thread(
            target=self._loop, args=(run,), name=WATCHER_THREAD_NAME, daemon=True
        )
        with self._lock:
            self._run = run
            self._last_thread = run.thread
            self._state = WatcherState.RUNNING
        run.thread.start()
        logger.info("Started watching %s (%s)", directory.resolve(), strategy.name)
        return True

    def stop(self) -> None:
        """Signal the current run to end. Does not wait for the thread."""
        with self._lock:
            run, self._run = self._run, None
            self._state = WatcherState.STOPPED
        if run is None:
            return
        run.stop_event.set()
        run.strategy.close()
        logger.info("Stop requested for file watcher on %s", run.directory)

    def join(self, timeout: float | None = None) -> None:
        """Wait for the most recent watcher thread to exit."""
        thread = self._last_thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    # --- Internal helpers -----------------------------------------------------

    def _open_strategy(self, directory: Path, mode: WatchMode) -> WatchStrategy:
        if mode is not WatchMode.POLLING:
            native = NativeWatchStrategy(settle_delay=self._settle_delay)
            try:
                native.open(directory)
                return native
            except OSError as exc:
                native.close()
                if mode is WatchMode.NATIVE:
                    raise
                logger.warning(
                    "Native file events unavailable (%s), falling back to polling", exc
                )

        polling = PollingWatchStrategy(
            self._ledger.is_known, self._poll_interval, self._reserved
        )
        polling.open(directory)
        return polling

    def _loop(self, run: _WatchRun) -> None:
        try:
            while not run.stop_event.is_set():
                batch = run.strategy.next_batch(run.stop_event)
                if batch is None:
                    break
                for path in batch:
                    if run.stop_event.is_set():
                        break
                    self._handle(path, run)
        except OSError as exc:
            logger.error("Error in file watcher on %s: %s", run.directory, exc)
        finally:
            run.strategy.close()
            with self._lock:
                if self._run is run:
                    self._run = None
                    self._state = WatcherState.STOPPED
            logger.info("File watcher stopped (%s)", run.directory)

    def _handle(self, path: Path, run: _WatchRun) -> None:
        name = path.name
        if not is_order_file(name, self._reserved):
            return
        logger.debug("File event: %s", name)

        # Give the writer a moment to finish before reading.
        if run.strategy.settle_delay > 0 and run.stop_event.wait(run.strategy.settle_delay):
            return

        if not self._ledger.claim(name):
            return
        try:
            orders = self._reader.read_all(path)
        except Exception:
            logger.exception("Unexpected error reading %s, skipping it", name)
            orders = []
        if not orders:
            self._ledger.release(name)
            return

        logger.info("Discovered %d order(s) in %s", len(orders), name)
        self._mailbox.post(OrdersDiscovered(orders=tuple(orders), source_file=name))
