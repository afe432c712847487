"""CLI commands that pull orders in from the uploads directory."""

from __future__ import annotations

import dataclasses
import time
from pathlib import Path

import click

from ordertrack.application.admit_orders import AdmitOrdersHandler
from ordertrack.application.auto_admit import AutoAdmitListener
from ordertrack.application.dto import format_currency
from ordertrack.domain.model.order import Order
from ordertrack.domain.model.order_board import OrderBoard
from ordertrack.infrastructure.bootstrap import (
    ingestion_pipeline,
    load_orders_handler,
    order_state_repository,
    xml_order_parser,
)
from ordertrack.infrastructure.config import Settings
from ordertrack.infrastructure.ingestion.watcher import WatcherState, WatchMode


def _with_uploads_dir(settings: Settings, directory: Path | None) -> Settings:
    if directory is None:
        return settings
    return dataclasses.replace(settings, uploads_dir=directory)


def _echo_admitted(orders: list[Order]) -> None:
    for order in orders:
        click.echo(
            f"  + {order.type_or_default:<12} {order.source or 'Unknown':<20} "
            f"{len(order.items_or_empty):>3} item(s) {format_currency(order.total):>10}"
        )


@click.command("scan")
@click.option(
    "--dir",
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Uploads directory (default: ORDERTRACK_UPLOADS_DIR).",
)
@click.pass_obj
def ingest_scan(settings: Settings, directory: Path | None) -> None:
    """Restore the saved board, then admit orders from new upload files."""
    settings = _with_uploads_dir(settings, directory)
    board = OrderBoard()
    loader = load_orders_handler(settings, board, ingestion_pipeline(settings))

    result = loader.handle_startup()

    if result.restored:
        click.echo(f"Restored {result.restored} order(s) from saved state")
    click.echo(f"{result.admitted} new order(s) added")


@click.command("watch")
@click.option(
    "--dir",
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Uploads directory (default: ORDERTRACK_UPLOADS_DIR).",
)
@click.option(
    "--mode",
    type=click.Choice([mode.value for mode in WatchMode]),
    default=None,
    help="Watch strategy (default: ORDERTRACK_WATCH_MODE).",
)
@click.option(
    "--duration",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Stop after this many seconds instead of waiting for Ctrl-C.",
)
@click.pass_obj
def ingest_watch(
    settings: Settings,
    directory: Path | None,
    mode: str | None,
    duration: float | None,
) -> None:
    """Watch the uploads directory and admit orders as files arrive."""
    settings = _with_uploads_dir(settings, directory)
    board = OrderBoard()
    pipeline = ingestion_pipeline(settings)
    loader = load_orders_handler(settings, board, pipeline)

    result = loader.handle_startup()
    click.echo(
        f"Board loaded: {result.restored} restored, {result.admitted} new order(s) added"
    )

    listener = AutoAdmitListener(
        AdmitOrdersHandler(board, order_state_repository(settings)),
        on_admitted=_echo_admitted,
    )
    pipeline.subscribe(listener)

    if not pipeline.start_watching(
        settings.uploads_dir, WatchMode(mode) if mode else None
    ):
        pipeline.unsubscribe(listener)
        raise click.ClickException(f"Cannot watch {settings.uploads_dir}")

    click.echo(
        f"Watching {settings.uploads_dir} ({pipeline.watch_strategy}). "
        "Press Ctrl-C to stop."
    )
    deadline = time.monotonic() + duration if duration is not None else None
    try:
        while pipeline.watch_state is not WatcherState.STOPPED:
            if deadline is not None and time.monotonic() >= deadline:
                break
            pipeline.process_pending(timeout=0.5)
    except KeyboardInterrupt:
        click.echo()
    finally:
        pipeline.stop_watching()
        pipeline.join_watcher(timeout=2.0)
        pipeline.process_pending()
        pipeline.unsubscribe(listener)

    click.echo(f"Stopped watching. {len(board.all_orders())} order(s) on the board.")


@click.command("check")
@click.option(
    "--dir",
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Uploads directory (default: ORDERTRACK_UPLOADS_DIR).",
)
@click.pass_obj
def ingest_check(settings: Settings, directory: Path | None) -> None:
    """Report what each XML upload would import, without admitting anything."""
    settings = _with_uploads_dir(settings, directory)
    results = xml_order_parser().parse_directory(settings.uploads_dir)

    if not results:
        click.echo(f"No XML files in {settings.uploads_dir}")
        return

    for result in results:
        click.echo(
            f"{result.source_file}: {result.success_count} imported, "
            f"{result.error_count} failed"
        )
        for error in result.errors:
            click.echo(f"  {error}")


@click.command("reset")
@click.confirmation_option(prompt="Clear the saved board?")
@click.pass_obj
def ingest_reset(settings: Settings) -> None:
    """Forget the saved board. Upload files and the canceled log are kept."""
    state_repo = order_state_repository(settings)
    if not state_repo.has_snapshot():
        click.echo("No saved board to clear.")
        return
    state_repo.clear_snapshot()
    if state_repo.has_snapshot():
        raise click.ClickException("Could not remove the saved board")
    click.echo("Saved board cleared.")
