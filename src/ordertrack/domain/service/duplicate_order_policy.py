"""Domain service: Dedup-on-Ingest.

The processed-file ledger only stops the *same file* from being read
twice.  Two different files can still describe the same order (a
corrected re-upload, a copy under another name), so every batch is
checked against the board by value before it is admitted.
"""

from __future__ import annotations

import logging

from ordertrack.domain.model.order import Order
from ordertrack.domain.model.order_board import OrderBoard

logger = logging.getLogger(__name__)


class DuplicateOrderPolicy:

    def filter_new(self, candidates: list[Order], board: OrderBoard) -> list[Order]:
        """Return the candidates not already on the board.

        A candidate is a duplicate if it equals any order in the pending,
        in-progress or completed collections, or an earlier candidate of
        the same batch that was accepted.
        """
        accepted: list[Order] = []
        for candidate in candidates:
            if board.contains(candidate) or candidate in accepted:
                logger.info(
                    "Skipping duplicate order from %s (source=%s, date=%s)",
                    candidate.source_file or "<unknown file>",
                    candidate.source,
                    candidate.order_date,
                )
                continue
            accepted.append(candidate)
        return accepted
