"""CLI commands for orders on the board.

Orders are addressed by status list and 1-based position, as printed by
``order list``.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import click

from ordertrack.application.delete_orders import DeleteOrdersHandler
from ordertrack.application.dto import BatchResult, OrderDTO, to_dto
from ordertrack.application.show_orders import ShowOrdersHandler
from ordertrack.application.transition_orders import TransitionOrdersHandler
from ordertrack.application.update_order_items import UpdateOrderItemsHandler
from ordertrack.domain.exceptions import DomainException
from ordertrack.domain.model.order import Item, Order, OrderStatus
from ordertrack.domain.model.order_board import OrderBoard
from ordertrack.infrastructure.bootstrap import (
    load_board,
    order_state_repository,
    source_files,
)
from ordertrack.infrastructure.config import Settings

_STATUS_NAMES = {
    "pending": OrderStatus.PENDING,
    "in-progress": OrderStatus.IN_PROGRESS,
    "completed": OrderStatus.COMPLETED,
}

_status_option = click.option(
    "--status",
    type=click.Choice(list(_STATUS_NAMES)),
    required=True,
    help="Status list the order is in.",
)
_positions_option = click.option(
    "--position",
    "positions",
    type=click.IntRange(min=1),
    multiple=True,
    required=True,
    help="1-based position in the list (repeatable).",
)


def _parse_items(raw: str) -> list[Item]:
    """Parse 'Burger:2:5.00,Fries:1:2.50' into Item list."""
    items: list[Item] = []
    for entry in raw.split(","):
        entry = entry.strip()
        parts = entry.rsplit(":", 2)
        if len(parts) != 3:
            raise click.BadParameter(
                f"Invalid item format '{entry}'. Expected 'Name:Quantity:Price'."
            )
        name, qty_str, price_str = parts
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(f"Invalid quantity '{qty_str}' for item '{name}'.")
        try:
            price = Decimal(price_str.strip().lstrip("$"))
        except InvalidOperation:
            raise click.BadParameter(f"Invalid price '{price_str}' for item '{name}'.")
        items.append(Item(name=name, quantity=qty, price=price))
    return items


def _resolve(board: OrderBoard, status: str, positions: tuple[int, ...]) -> list[Order]:
    """Look every position up before anything moves, so positions stay stable."""
    handler = ShowOrdersHandler(board)
    try:
        return [handler.get(_STATUS_NAMES[status], p) for p in dict.fromkeys(positions)]
    except DomainException as exc:
        raise click.ClickException(str(exc))


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order {dto.status} #{dto.position}  ({dto.order_type})")
    click.echo(f"Source: {dto.source}")
    click.echo(f"Date:   {dto.order_date}")
    click.echo()
    click.echo(f"  {'Item':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<20} {item.quantity:>5} {item.price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


def _report_batch(verb: str, result: BatchResult) -> None:
    click.echo(f"{verb} {result.success_count} order(s)")
    for failure in result.failures:
        click.echo(failure, err=True)
    if result.failure_count:
        raise click.ClickException(f"{result.failure_count} order(s) could not be moved")


@click.command("list")
@click.option(
    "--status",
    type=click.Choice(list(_STATUS_NAMES)),
    default=None,
    help="Only show this status list.",
)
@click.pass_obj
def order_list(settings: Settings, status: str | None) -> None:
    """List orders on the board."""
    handler = ShowOrdersHandler(load_board(settings))
    dtos = handler.list_orders(_STATUS_NAMES[status] if status else None)

    if not dtos:
        click.echo("No orders.")
        return

    click.echo(
        f"  {'Status':<12} {'#':>3}  {'Type':<12} {'Source':<20} {'Date':<16} {'Total':>10}"
    )
    click.echo(f"  {'-'*78}")
    for dto in dtos:
        click.echo(
            f"  {dto.status:<12} {dto.position:>3}  {dto.order_type:<12} "
            f"{dto.source:<20} {dto.order_date:<16} {dto.total:>10}"
        )


@click.command("canceled")
@click.pass_obj
def order_canceled(settings: Settings) -> None:
    """List orders from the canceled-orders log."""
    canceled = order_state_repository(settings).load_canceled()

    if not canceled:
        click.echo("No canceled orders.")
        return

    click.echo(f"  {'#':>3}  {'Type':<12} {'Source':<20} {'Date':<16} {'Total':>10}")
    click.echo(f"  {'-'*65}")
    for position, order in enumerate(canceled, start=1):
        dto = to_dto(order, position)
        click.echo(
            f"  {dto.position:>3}  {dto.order_type:<12} "
            f"{dto.source:<20} {dto.order_date:<16} {dto.total:>10}"
        )


@click.command("show")
@_status_option
@click.option("--position", type=click.IntRange(min=1), required=True, help="1-based position.")
@click.pass_obj
def order_show(settings: Settings, status: str, position: int) -> None:
    """Show the items of one order."""
    handler = ShowOrdersHandler(load_board(settings))

    try:
        dto = handler.show(_STATUS_NAMES[status], position)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("start")
@_positions_option
@click.pass_obj
def order_start(settings: Settings, positions: tuple[int, ...]) -> None:
    """Move pending orders to in-progress."""
    board = load_board(settings)
    orders = _resolve(board, "pending", positions)
    handler = TransitionOrdersHandler(board, order_state_repository(settings))
    _report_batch("Started", handler.start_all(orders))


@click.command("complete")
@_positions_option
@click.pass_obj
def order_complete(settings: Settings, positions: tuple[int, ...]) -> None:
    """Move in-progress orders to completed."""
    board = load_board(settings)
    orders = _resolve(board, "in-progress", positions)
    handler = TransitionOrdersHandler(board, order_state_repository(settings))
    _report_batch("Completed", handler.complete_all(orders))


@click.command("undo-start")
@_positions_option
@click.pass_obj
def order_undo_start(settings: Settings, positions: tuple[int, ...]) -> None:
    """Move in-progress orders back to pending."""
    board = load_board(settings)
    orders = _resolve(board, "in-progress", positions)
    handler = TransitionOrdersHandler(board, order_state_repository(settings))
    _report_batch("Moved back to pending:", handler.undo_start_all(orders))


@click.command("undo-complete")
@_positions_option
@click.pass_obj
def order_undo_complete(settings: Settings, positions: tuple[int, ...]) -> None:
    """Move completed orders back to in-progress."""
    board = load_board(settings)
    orders = _resolve(board, "completed", positions)
    handler = TransitionOrdersHandler(board, order_state_repository(settings))
    _report_batch("Moved back to in-progress:", handler.undo_complete_all(orders))


@click.command("delete")
@_status_option
@_positions_option
@click.pass_obj
def order_delete(settings: Settings, status: str, positions: tuple[int, ...]) -> None:
    """Cancel orders: log them, remove their upload files and drop them from the board."""
    board = load_board(settings)
    orders = _resolve(board, status, positions)
    handler = DeleteOrdersHandler(
        board=board,
        state_repo=order_state_repository(settings),
        source_files=source_files(settings),
    )

    result = handler.handle_all(orders)

    click.echo(
        f"Deleted {result.success_count} order(s), "
        f"{result.files_deleted_count} source file(s) removed"
    )
    for failure in result.failures:
        click.echo(failure, err=True)
    if result.failures:
        raise click.ClickException(f"{len(result.failures)} order(s) could not be deleted")


@click.command("set-items")
@_status_option
@click.option("--position", type=click.IntRange(min=1), required=True, help="1-based position.")
@click.option("--items", required=True, help="Items as 'Name:Qty:Price,Name:Qty:Price'.")
@click.pass_obj
def order_set_items(settings: Settings, status: str, position: int, items: str) -> None:
    """Replace the items of an order."""
    new_items = _parse_items(items)
    board = load_board(settings)
    order = _resolve(board, status, (position,))[0]
    handler = UpdateOrderItemsHandler(board, order_state_repository(settings))

    try:
        handler.handle(order, new_items)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(ShowOrdersHandler(board).show(_STATUS_NAMES[status], position))
