import click
import pydantic

from orderflow.infrastructure.cli.order_commands import (
    order_create,
    order_redeliver,
    order_show,
)
from orderflow.infrastructure.config import Settings
from orderflow.infrastructure.logging import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """orderflow — basket checkout and order propagation"""
    try:
        settings = Settings()
    except pydantic.ValidationError as exc:
        raise click.ClickException(f"Invalid configuration:\n{exc}")
    configure_logging(settings.log_level, json=settings.log_json)
    ctx.obj = settings


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_redeliver)
order.add_command(order_show)
