"""CLI commands package."""

from typing import Optional

import click

from ...logging import setup_logging
from .indexes import indexes
from .keys import keys, secured_key
from .logs import logs
from .search import search


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v, -vv, -vvv)")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory containing algolia.yaml and .env",
)
@click.pass_context
def cli(ctx: click.Context, verbose: int, config_dir: Optional[str]) -> None:
    """Algolia Search CLI"""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir
    ctx.obj["verbose"] = verbose


cli.add_command(indexes)
cli.add_command(keys)
cli.add_command(logs)
cli.add_command(search)
cli.add_command(secured_key)
