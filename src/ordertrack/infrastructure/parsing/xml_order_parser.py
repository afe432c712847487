"""Reader for XML uploads holding one or more ``<order>`` elements.

Each order is parsed on its own: a broken order becomes an entry in
``XmlImportResult.errors`` and its siblings are still imported.  When the
document as a whole is not well-formed, the text is cut at every
``<order>`` start tag and each piece is parsed separately, so a single
unclosed tag only costs the order that contains it.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from ordertrack.domain.exceptions import OrderParseError
from ordertrack.domain.model.order import UNKNOWN_ITEM_NAME, Item, Order
from ordertrack.infrastructure.parsing import fields

logger = logging.getLogger(__name__)

_ORDER_START = re.compile(r"<order(?=[\s/>])")
_ORDER_END = re.compile(r"</order\s*>")


@dataclass
class XmlImportResult:
    """Outcome of importing one XML file; partial success is normal."""

    source_file: str
    orders: list[Order] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def success_count(self) -> int:
        return len(self.orders)

    @property
    def error_count(self) -> int:
        return len(self.errors)


class XmlOrderParser:

    def parse_all(self, path: Path) -> XmlImportResult:
        result = XmlImportResult(source_file=path.name)

        try:
            data = path.read_bytes()
        except OSError as exc:
            result.errors.append(f"Failed to process XML file: {exc}")
            return result

        try:
            root = ET.fromstring(data)
        except ET.ParseError as exc:
            logger.warning("%s is not well-formed (%s), recovering order by order", path.name, exc)
            self._recover(data, exc, result)
        else:
            for index, element in enumerate(root.iter("order"), start=1):
                self._collect(element, index, result)

        for order in result.orders:
            order.source_file = path.name
        return result

    def parse_one(self, path: Path) -> Order:
        """The first order in *path*; raises if the file holds none."""
        result = self.parse_all(path)
        if not result.orders:
            detail = "; ".join(result.errors) or "no <order> elements"
            raise OrderParseError(f"No valid orders found in {path.name}: {detail}")
        return result.orders[0]

    def parse_directory(self, directory: Path) -> list[XmlImportResult]:
        """One result per .xml file in *directory*, for reporting.

        A missing or unreadable directory gives an empty list.
        """
        try:
            paths = sorted(
                p for p in directory.iterdir()
                if p.suffix.lower() == ".xml" and p.is_file()
            )
        except OSError as exc:
            logger.error("Error reading XML files from %s: %s", directory, exc)
            return []
        return [self.parse_all(path) for path in paths]

    # --- Document level -------------------------------------------------------

    def _recover(self, data: bytes, error: ET.ParseError, result: XmlImportResult) -> None:
        text = data.decode("utf-8", errors="replace")
        starts = [m.start() for m in _ORDER_START.finditer(text)]
        if not starts:
            result.errors.append(f"Failed to process XML file: {error}")
            return

        bounds = [*starts[1:], len(text)]
        for index, (start, stop) in enumerate(zip(starts, bounds), start=1):
            segment = text[start:stop]
            ends = list(_ORDER_END.finditer(segment))
            if not ends:
                result.errors.append(
                    f"Error parsing order #{index}: missing closing </order> tag"
                )
                continue
            try:
                element = ET.fromstring(segment[: ends[-1].end()])
            except ET.ParseError as exc:
                result.errors.append(f"Error parsing order #{index}: {exc}")
                continue
            self._collect(element, index, result)

    def _collect(self, element: ET.Element, index: int, result: XmlImportResult) -> None:
        try:
            result.orders.append(self.parse_order_element(element))
        except OrderParseError as exc:
            result.errors.append(f"Error parsing order #{index}: {exc}")

    # --- Element level --------------------------------------------------------

    def parse_order_element(self, element: ET.Element) -> Order:
        order = Order(
            order_type=fields.ORDER_TYPE.extract(element),
            source=fields.ORDER_SOURCE.extract(element),
            order_date=fields.parse_date(fields.ORDER_DATE.extract(element)),
            items=self._parse_items(element),
        )
        if not order.is_valid:
            raise OrderParseError(
                f"order_date={order.order_date}, items={len(order.items_or_empty)}"
            )
        return order

    def _parse_items(self, element: ET.Element) -> list[Item]:
        container = fields.find_container(element)
        items = [
            self.parse_item_element(node)
            for tag in fields.ITEM_TAGS
            for node in container.iter(tag)
            if node is not container
        ]
        if not items:
            items.append(Item(name=UNKNOWN_ITEM_NAME, quantity=1, price=0))
        return items

    @staticmethod
    def parse_item_element(element: ET.Element) -> Item:
        return Item(
            name=fields.ITEM_NAME.extract(element),
            quantity=fields.parse_quantity(fields.ITEM_QUANTITY.extract(element)),
            price=fields.parse_price(fields.ITEM_PRICE.extract(element)),
        )
