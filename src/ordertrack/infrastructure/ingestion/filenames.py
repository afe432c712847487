"""Which directory entries count as order uploads."""

from __future__ import annotations

from collections.abc import Collection

from ordertrack.infrastructure.parsing.order_file_reader import ORDER_FILE_SUFFIXES
from ordertrack.infrastructure.persistence.json_order_state_repository import (
    CANCELED_FILENAME,
    SNAPSHOT_FILENAME,
)

# Files the tracker writes itself; never read back as uploads.
RESERVED_FILENAMES = frozenset({SNAPSHOT_FILENAME, CANCELED_FILENAME})


def is_order_file(name: str, reserved: Collection[str] = RESERVED_FILENAMES) -> bool:
    return name.lower().endswith(ORDER_FILE_SUFFIXES) and name not in reserved
