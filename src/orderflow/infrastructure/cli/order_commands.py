"""CLI commands for the Order aggregate."""

from __future__ import annotations

import asyncio

import click

from orderflow.application.dto import AddressSpec, OrderDTO
from orderflow.application.show_order import ShowOrderHandler
from orderflow.domain.exceptions import DomainException
from orderflow.infrastructure.bootstrap import (
    order_creation,
    order_redelivery,
    order_repository,
)
from orderflow.infrastructure.config import MissingSetting, Settings


async def _create(settings: Settings, basket_id: int, address: AddressSpec):
    async with order_creation(settings) as handler:
        return await handler.handle(basket_id, address)


async def _redeliver(settings: Settings):
    async with order_redelivery(settings) as handler:
        return await handler.handle()


@click.command("create")
@click.option("--basket", "basket_id", required=True, type=int, help="Basket ID to check out.")
@click.option("--street", required=True, help="Shipping street.")
@click.option("--city", required=True, help="Shipping city.")
@click.option("--state", required=True, help="Shipping state.")
@click.option("--country", required=True, help="Shipping country.")
@click.option("--zip", "zip_code", required=True, help="Shipping zip code.")
@click.pass_obj
def order_create(
    settings: Settings,
    basket_id: int,
    street: str,
    city: str,
    state: str,
    country: str,
    zip_code: str,
) -> None:
    """Check out a basket into a new order."""
    address = AddressSpec(street, city, state, country, zip_code)

    try:
        result = asyncio.run(_create(settings, basket_id, address))
    except MissingSetting as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{result.order_id} created for buyer {result.buyer_id}")
    click.echo(f"  Items: {result.item_count}   Total: {result.total}")
    click.echo(f"  Stages: {' -> '.join(result.stages)}")
    for warning in result.warnings:
        click.echo(f"  WARNING {warning.channel}: {warning.error} (queued for redelivery)")


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}")
    click.echo(f"Buyer:    {dto.buyer_id}")
    click.echo(f"Ship to:  {dto.ship_to}")
    click.echo(f"Created:  {dto.order_date}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.units:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(settings: Settings, order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository(settings))

    try:
        dto = asyncio.run(handler.handle(order_id))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("redeliver")
@click.pass_obj
def order_redeliver(settings: Settings) -> None:
    """Retry downstream deliveries that failed at checkout."""
    try:
        report = asyncio.run(_redeliver(settings))
    except MissingSetting as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")
    click.echo(
        f"Redelivered {report.delivered}, still failing {report.failed}, "
        f"skipped {report.skipped}."
    )
