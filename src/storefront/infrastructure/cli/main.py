import click

from storefront.infrastructure.bootstrap import build_container
from storefront.infrastructure.cli.order_commands import (
    order_mark_paid,
    order_payment,
    order_remind,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.size_commands import size_list, size_update
from storefront.infrastructure.config import load_config
from storefront.infrastructure.logging_setup import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Storefront: orders, sizes and the HTTP server"""
    if ctx.obj is None:
        config = load_config()
        configure_logging(config.LOG_LEVEL)
        ctx.obj = build_container(config)
        ctx.call_on_close(ctx.obj.close)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def size() -> None:
    """Manage sizes."""


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8888, show_default=True, type=int)
@click.pass_obj
def serve(container, host: str, port: int) -> None:
    """Run the HTTP API."""
    import uvicorn

    from storefront.infrastructure.api.app import create_app

    uvicorn.run(create_app(container), host=host, port=port)


# Register subcommands
order.add_command(order_mark_paid)
order.add_command(order_payment)
order.add_command(order_remind)
order.add_command(order_show)
order.add_command(order_status)
size.add_command(size_list)
size.add_command(size_update)
