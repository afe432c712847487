"""Ways of noticing new upload files.

Both strategies expose the same contract: ``open`` the directory, hand
out candidate paths with ``next_batch`` until the source ends (``None``),
then ``close``.  The watcher owns the thread that drives them.
"""

from __future__ import annotations

import logging
import os
import queue
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Collection
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from ordertrack.infrastructure.ingestion.filenames import RESERVED_FILENAMES, is_order_file

logger = logging.getLogger(__name__)


class WatchStrategy(ABC):

    name: str = "abstract"
    settle_delay: float = 0.0

    @abstractmethod
    def open(self, directory: Path) -> None:
        """Start observing *directory*. Raises OSError if that is not possible."""

    @abstractmethod
    def next_batch(self, stop: threading.Event) -> list[Path] | None:
        """Block until candidate paths are available.

        Returns None when *stop* is set or the source can no longer
        deliver events (directory gone, observer died).
        """

    @abstractmethod
    def close(self) -> None:
        """Release OS resources. Safe to call more than once."""


class _QueueingHandler(FileSystemEventHandler):
    """Forwards watchdog file events into a queue read by the watcher thread."""

    def __init__(self, sink: queue.Queue[Path]) -> None:
        super().__init__()
        self._sink = sink

    def on_created(self, event: FileSystemEvent) -> None:
        self._forward(event, event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        self._forward(event, event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        # Writers that save to a temp name and rename land here.
        self._forward(event, event.dest_path)

    def _forward(self, event: FileSystemEvent, raw_path: str | bytes) -> None:
        if not event.is_directory:
            self._sink.put(Path(os.fsdecode(raw_path)))


class NativeWatchStrategy(WatchStrategy):
    """Operating-system file events through a watchdog observer."""

    name = "native"

    def __init__(self, settle_delay: float = 0.1, wait_interval: float = 0.25) -> None:
        self.settle_delay = settle_delay
        self._wait_interval = wait_interval
        self._events: queue.Queue[Path] = queue.Queue()
        self._observer = Observer()
        self._directory: Path | None = None
        self._closed = False

    def open(self, directory: Path) -> None:
        self._directory = directory
        self._observer.schedule(
            _QueueingHandler(self._events), str(directory), recursive=False
        )
        self._observer.start()

    def next_batch(self, stop: threading.Event) -> list[Path] | None:
        while not stop.is_set():
            if not self._observer.is_alive() or not self._directory.is_dir():
                logger.warning("Watch on %s is no longer valid", self._directory)
                return None
            try:
                first = self._events.get(timeout=self._wait_interval)
            except queue.Empty:
                continue

            batch = [first]
            while True:
                try:
                    batch.append(self._events.get_nowait())
                except queue.Empty:
                    break
            return list(dict.fromkeys(batch))
        return None

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._observer.stop()
        if self._observer.is_alive():
            self._observer.join(timeout=1.0)


class PollingWatchStrategy(WatchStrategy):
    """Re-lists the directory on a fixed interval.

    A name is a candidate only if it is unknown to the ledger *and* was
    absent from the previous listing, so a file caught mid-write on one
    tick is not acted on again on the next.
    """

    name = "polling"

    def __init__(
        self,
        is_known: Callable[[str], bool],
        poll_interval: float = 2.0,
        reserved: Collection[str] = RESERVED_FILENAMES,
    ) -> None:
        self._is_known = is_known
        self._poll_interval = poll_interval
        self._reserved = reserved
        self._directory: Path | None = None
        self._previous: set[str] = set()

    def open(self, directory: Path) -> None:
        if not directory.is_dir():
            raise NotADirectoryError(f"Not a directory: {directory}")
        self._directory = directory
        self._previous = set()

    def next_batch(self, stop: threading.Event) -> list[Path] | None:
        while not stop.wait(self._poll_interval):
            current = [
                p.name
                for p in self._directory.iterdir()
                if is_order_file(p.name, self._reserved)
            ]
            fresh = [
                name
                for name in current
                if not self._is_known(name) and name not in self._previous
            ]
            self._previous = set(current)
            if fresh:
                return [self._directory / name for name in fresh]
        return None

    def close(self) -> None:
        self._previous = set()
