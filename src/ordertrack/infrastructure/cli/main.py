import click

from ordertrack.infrastructure.cli.ingest_commands import (
    ingest_check,
    ingest_reset,
    ingest_scan,
    ingest_watch,
)
from ordertrack.infrastructure.cli.order_commands import (
    order_canceled,
    order_complete,
    order_delete,
    order_list,
    order_set_items,
    order_show,
    order_start,
    order_undo_complete,
    order_undo_start,
)
from ordertrack.infrastructure.config import (
    ConfigurationError,
    load_settings,
    parse_log_level,
)
from ordertrack.infrastructure.logging_config import setup_logging


@click.group()
@click.option("--log-level", default=None, help="Override ORDERTRACK_LOG_LEVEL.")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """ordertrack — restaurant order intake and tracking"""
    try:
        settings = load_settings()
        level = parse_log_level(log_level, settings.log_level)
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))
    setup_logging(level, settings.log_file)
    ctx.obj = settings


@cli.group()
def order() -> None:
    """Manage orders on the board."""


# Register subcommands
cli.add_command(ingest_check)
cli.add_command(ingest_reset)
cli.add_command(ingest_scan)
cli.add_command(ingest_watch)
order.add_command(order_canceled)
order.add_command(order_complete)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_set_items)
order.add_command(order_show)
order.add_command(order_start)
order.add_command(order_undo_complete)
order.add_command(order_undo_start)
