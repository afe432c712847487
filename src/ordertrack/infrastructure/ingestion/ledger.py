"""Processed-file ledger.

Remembers which upload file names (not paths) already produced orders so
neither the scanner nor the watcher reads them again.  The watcher thread
*claims* a name while its batch travels to the owner thread; the owner
thread *commits* it on delivery.  Both sets sit behind one lock.
"""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class ProcessedFileLedger:

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._processed: set[str] = set()
        self._claimed: set[str] = set()

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._processed

    def __len__(self) -> int:
        with self._lock:
            return len(self._processed)

    def names(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._processed)

    def is_known(self, name: str) -> bool:
        """True if *name* is processed or currently claimed."""
        with self._lock:
            return name in self._processed or name in self._claimed

    def add(self, name: str) -> bool:
        """Mark *name* processed. Returns False if it already was."""
        with self._lock:
            self._claimed.discard(name)
            if name in self._processed:
                return False
            self._processed.add(name)
            return True

    def claim(self, name: str) -> bool:
        """Reserve *name* for reading. Returns False if it is already known."""
        with self._lock:
            if name in self._processed or name in self._claimed:
                return False
            self._claimed.add(name)
            return True

    def release(self, name: str) -> None:
        """Drop a claim without marking the file processed; it stays eligible."""
        with self._lock:
            self._claimed.discard(name)

    def commit(self, name: str) -> bool:
        """Turn a claim into a processed entry. Returns False if already processed."""
        return self.add(name)

    def reset(self) -> None:
        with self._lock:
            count = len(self._processed)
            self._processed.clear()
            self._claimed.clear()
        logger.info("Processed-file ledger reset (%d entries cleared)", count)
