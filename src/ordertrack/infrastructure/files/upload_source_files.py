"""Locate and delete the upload file an order was read from."""

from __future__ import annotations

import logging
from pathlib import Path

from ordertrack.domain.model.order import Order
from ordertrack.domain.repository.source_file_repository import SourceFileRepository
from ordertrack.infrastructure.ingestion.filenames import is_order_file

logger = logging.getLogger(__name__)


class UploadSourceFiles(SourceFileRepository):

    def __init__(self, uploads_dir: Path) -> None:
        self._uploads_dir = uploads_dir

    def find(self, order: Order) -> Path | None:
        """Best match for *order* in the uploads directory.

        Tries, in order: the file recorded on the order, a file whose name
        contains the order's source (case, spaces and underscores ignored),
        a file whose name contains the order timestamp.  No match, no file.
        """
        if order.source_file:
            tracked = self._uploads_dir / order.source_file
            if tracked.is_file():
                return tracked

        try:
            files = [p for p in self._uploads_dir.iterdir() if is_order_file(p.name)]
        except OSError as exc:
            logger.warning("Cannot list %s: %s", self._uploads_dir, exc)
            return None

        if order.source:
            wanted = _normalise(order.source)
            for path in files:
                if wanted and wanted in _normalise(path.name):
                    logger.info("Found file for order %s by source: %s", order.source, path)
                    return path

        if order.order_date > 0:
            stamp = str(order.order_date)
            for path in files:
                if stamp in path.name:
                    logger.info("Found file for order %s by timestamp: %s", order.source, path)
                    return path

        logger.warning(
            "Could not find source file for order %s (date: %s)",
            order.source or "unknown",
            order.order_date,
        )
        return None

    def delete(self, path: Path) -> bool:
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("Source file no longer exists: %s", path)
            return False
        except OSError as exc:
            logger.error("Error deleting source file %s: %s", path, exc)
            return False
        logger.info("Deleted source file: %s", path)
        return True


def _normalise(text: str) -> str:
    return text.lower().replace(" ", "").replace("_", "")
