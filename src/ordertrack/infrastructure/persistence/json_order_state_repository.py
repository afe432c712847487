"""JSON-file-backed implementation of OrderStateRepository."""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from pathlib import Path

from ordertrack.domain.model.order import Item, Order, OrderStatus
from ordertrack.domain.model.order_board import OrderSnapshot
from ordertrack.domain.repository.order_state_repository import OrderStateRepository

logger = logging.getLogger(__name__)

SNAPSHOT_FILENAME = "orders_state.json"
CANCELED_FILENAME = "canceled_orders.json"


class JsonOrderStateRepository(OrderStateRepository):

    def __init__(self, data_dir: Path) -> None:
        self._snapshot_path = data_dir / SNAPSHOT_FILENAME
        self._canceled_path = data_dir / CANCELED_FILENAME

    # --- OrderStateRepository interface ---------------------------------------

    def save_snapshot(
        self,
        pending: list[Order],
        in_progress: list[Order],
        completed: list[Order],
    ) -> bool:
        raw = {
            "pending_orders": [self._to_raw(o) for o in pending],
            "in_progress_orders": [self._to_raw(o) for o in in_progress],
            "completed_orders": [self._to_raw(o) for o in completed],
        }
        try:
            self._persist_raw(self._snapshot_path, raw)
        except OSError as exc:
            logger.error("Error saving order state: %s", exc)
            return False
        logger.debug(
            "Order state saved (%d pending, %d in-progress, %d completed)",
            len(pending),
            len(in_progress),
            len(completed),
        )
        return True

    def load_snapshot(self) -> OrderSnapshot | None:
        if not self._snapshot_path.exists():
            return None
        try:
            raw = self._load_raw(self._snapshot_path)
            snapshot = OrderSnapshot(
                pending=[self._to_domain(o) for o in raw.get("pending_orders", [])],
                in_progress=[self._to_domain(o) for o in raw.get("in_progress_orders", [])],
                completed=[self._to_domain(o) for o in raw.get("completed_orders", [])],
            )
        except (OSError, ValueError, KeyError, TypeError, AttributeError, ArithmeticError) as exc:
            logger.error("Error loading order state: %s", exc)
            return None
        logger.info(
            "Loaded: %d pending, %d in-progress, %d completed orders",
            len(snapshot.pending),
            len(snapshot.in_progress),
            len(snapshot.completed),
        )
        return snapshot

    def has_snapshot(self) -> bool:
        return self._snapshot_path.exists()

    def clear_snapshot(self) -> None:
        try:
            self._snapshot_path.unlink(missing_ok=True)
        except OSError as exc:
            logger.error("Error clearing saved state: %s", exc)
            return
        logger.info("Saved order state cleared")

    def append_canceled(self, order: Order) -> bool:
        try:
            canceled = self._load_canceled_raw()
            canceled.append(self._to_raw(order))
            self._persist_raw(self._canceled_path, canceled)
        except (OSError, ValueError) as exc:
            logger.error("Error saving canceled order: %s", exc)
            return False
        logger.info("Canceled order saved: %s", order.source)
        return True

    def load_canceled(self) -> list[Order]:
        try:
            return [self._to_domain(o) for o in self._load_canceled_raw()]
        except (OSError, ValueError, KeyError, TypeError, AttributeError, ArithmeticError) as exc:
            logger.error("Error loading canceled orders: %s", exc)
            return []

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "type": order.order_type,
            "source": order.source,
            "order_date": order.order_date,
            "status": order.status.value,
            "source_file": order.source_file,
            "items": [
                {
                    "name": item.name,
                    "quantity": item.quantity,
                    "price": str(item.price),
                }
                for item in order.items_or_empty
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            Item(
                name=i.get("name"),
                quantity=i.get("quantity", 0),
                price=Decimal(str(i.get("price", "0"))),
            )
            for i in raw.get("items") or []
        ]
        return Order(
            order_type=raw.get("type"),
            source=raw.get("source"),
            order_date=int(raw.get("order_date", 0)),
            items=items,
            status=OrderStatus(raw.get("status", OrderStatus.PENDING.value)),
            source_file=raw.get("source_file"),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_canceled_raw(self) -> list[dict]:
        if not self._canceled_path.exists():
            return []
        raw = self._load_raw(self._canceled_path)
        if not isinstance(raw, list):
            raise ValueError(f"{self._canceled_path.name} does not hold a list")
        return raw

    @staticmethod
    def _load_raw(path: Path):
        return json.loads(path.read_text(encoding="utf-8"))

    @staticmethod
    def _persist_raw(path: Path, raw: object) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(raw, indent=2) + "\n", encoding="utf-8")
