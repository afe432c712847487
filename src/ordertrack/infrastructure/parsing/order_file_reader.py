"""Dispatch an upload file to the right parser by extension.

Both entry points are total: problems are logged and reported as "no
orders", never raised, so one bad upload cannot stall a scan or the
watcher thread.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ordertrack.domain.exceptions import OrderParseError
from ordertrack.domain.model.order import Order
from ordertrack.infrastructure.parsing.json_order_parser import JsonOrderParser
from ordertrack.infrastructure.parsing.xml_order_parser import XmlOrderParser

logger = logging.getLogger(__name__)

JSON_SUFFIX = ".json"
XML_SUFFIX = ".xml"
ORDER_FILE_SUFFIXES = (JSON_SUFFIX, XML_SUFFIX)


class OrderFileReader:

    def __init__(
        self,
        json_parser: JsonOrderParser | None = None,
        xml_parser: XmlOrderParser | None = None,
    ) -> None:
        self._json = json_parser or JsonOrderParser()
        self._xml = xml_parser or XmlOrderParser()

    def read_order(self, path: Path) -> Order | None:
        """A single order from *path* (the first one for XML), or None."""
        if not _is_file(path):
            return None

        suffix = path.suffix.lower()
        try:
            if suffix == JSON_SUFFIX:
                return self._json.parse_one(path)
            if suffix == XML_SUFFIX:
                return self._xml.parse_one(path)
        except OrderParseError as exc:
            logger.warning("Skipping %s: %s", path.name, exc)
            return None

        logger.warning("Unsupported file type: %s", path)
        return None

    def read_all(self, path: Path) -> list[Order]:
        """Every order in *path*: all of them for XML, zero or one for JSON."""
        if path.suffix.lower() != XML_SUFFIX:
            order = self.read_order(path)
            return [order] if order is not None else []

        if not _is_file(path):
            return []

        result = self._xml.parse_all(path)
        if result.has_errors:
            logger.warning(
                "Errors in XML file %s (%d imported, %d failed)",
                path.name,
                result.success_count,
                result.error_count,
            )
            for error in result.errors:
                logger.warning("  %s", error)
        return result.orders


def _is_file(path: Path) -> bool:
    try:
        if path.is_file():
            return True
    except OSError as exc:
        logger.warning("Cannot access %s: %s", path, exc)
        return False
    logger.warning("File not found: %s", path)
    return False
