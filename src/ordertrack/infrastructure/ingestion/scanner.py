"""One-shot scan of the uploads directory.

Runs on the owner thread.  Files already in the ledger are skipped, so
scanning twice without new uploads yields nothing the second time.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from pathlib import Path

from ordertrack.domain.model.order import Order
from ordertrack.infrastructure.ingestion.filenames import RESERVED_FILENAMES, is_order_file
from ordertrack.infrastructure.ingestion.ledger import ProcessedFileLedger
from ordertrack.infrastructure.parsing.order_file_reader import (
    JSON_SUFFIX,
    XML_SUFFIX,
    OrderFileReader,
)

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_DIRS = (Path("uploads"), Path("data") / "uploads")


class DirectoryScanner:

    def __init__(
        self,
        reader: OrderFileReader,
        ledger: ProcessedFileLedger,
        fallback_dirs: Sequence[Path] = DEFAULT_FALLBACK_DIRS,
        reserved: Collection[str] = RESERVED_FILENAMES,
    ) -> None:
        self._reader = reader
        self._ledger = ledger
        self._fallback_dirs = tuple(fallback_dirs)
        self._reserved = reserved

    def resolve(self, directory: Path) -> Path | None:
        """The first existing directory among *directory* and the fallbacks."""
        for candidate in (directory, *self._fallback_dirs):
            if candidate.is_dir():
                if candidate != directory:
                    logger.info("%s not found, scanning %s instead", directory, candidate)
                return candidate
        return None

    def scan(self, directory: Path) -> list[Order]:
        target = self.resolve(directory)
        if target is None:
            logger.warning("Orders directory not found: %s", directory)
            return []

        try:
            entries = [p for p in target.iterdir() if is_order_file(p.name, self._reserved)]
        except OSError as exc:
            logger.error("Error reading orders from %s: %s", target, exc)
            return []

        orders: list[Order] = []

        # JSON uploads carry exactly one order each.
        for path in entries:
            if path.suffix.lower() != JSON_SUFFIX or self._ledger.is_known(path.name):
                continue
            order = self._reader.read_order(path)
            if order is not None:
                orders.append(order)
                self._ledger.add(path.name)

        # XML uploads may carry several; a file with none is retried next scan.
        for path in entries:
            if path.suffix.lower() != XML_SUFFIX or self._ledger.is_known(path.name):
                continue
            found = self._reader.read_all(path)
            orders.extend(found)
            if found:
                self._ledger.add(path.name)

        logger.info("Scanned %s: %d new order(s)", target, len(orders))
        return orders
