"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions or on what it is handed.
"""

from __future__ import annotations

from ordertrack.application.admit_orders import AdmitOrdersHandler
from ordertrack.application.load_orders import LoadOrdersHandler
from ordertrack.domain.model.order_board import OrderBoard
from ordertrack.infrastructure.config import Settings
from ordertrack.infrastructure.files.upload_source_files import UploadSourceFiles
from ordertrack.infrastructure.ingestion.pipeline import OrderIngestionPipeline
from ordertrack.infrastructure.parsing.xml_order_parser import XmlOrderParser
from ordertrack.infrastructure.persistence.json_order_state_repository import (
    JsonOrderStateRepository,
)


def order_state_repository(settings: Settings) -> JsonOrderStateRepository:
    return JsonOrderStateRepository(settings.data_dir)


def source_files(settings: Settings) -> UploadSourceFiles:
    return UploadSourceFiles(settings.uploads_dir)


def xml_order_parser() -> XmlOrderParser:
    return XmlOrderParser()


def ingestion_pipeline(settings: Settings) -> OrderIngestionPipeline:
    return OrderIngestionPipeline(
        watch_mode=settings.watch_mode,
        poll_interval=settings.poll_interval,
        settle_delay=settings.settle_delay,
    )


def load_board(settings: Settings) -> OrderBoard:
    """A board restored from the saved snapshot (empty if there is none)."""
    board = OrderBoard()
    snapshot = order_state_repository(settings).load_snapshot()
    if snapshot is not None:
        board.restore(snapshot)
    return board


def load_orders_handler(
    settings: Settings,
    board: OrderBoard,
    pipeline: OrderIngestionPipeline,
) -> LoadOrdersHandler:
    state_repo = order_state_repository(settings)
    return LoadOrdersHandler(
        board=board,
        state_repo=state_repo,
        scan_orders=lambda: pipeline.scan_once(settings.uploads_dir),
        admit=AdmitOrdersHandler(board, state_repo),
        remember_file=pipeline.ledger.add,
    )
