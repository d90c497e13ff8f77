"""Shared helpers for CLI commands."""

import logging
import sys
from typing import Any, NoReturn

import click
from rich.console import Console
from rich.markup import escape

from ..client import SearchClient
from ..config import get_config
from ..exceptions import ServiceError
from ..logging import setup_logging

logger = logging.getLogger(__name__)
console = Console()


def open_client(ctx: click.Context) -> SearchClient:
    """Create a client from the configuration selected on the command line.

    The configured log level applies unless -v was given.
    """
    config = get_config(ctx.obj.get("config_dir"))
    if not ctx.obj.get("verbose"):
        setup_logging(level=config.log_level)
    return SearchClient.from_config(config)


def print_json(data: Any) -> None:
    console.print_json(data=data)


def fail(error: Exception) -> NoReturn:
    logger.error(f"Command failed: {error}")
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    if isinstance(error, ServiceError) and not error.is_terminal:
        console.print("[yellow]No host could be reached.[/yellow]")
    sys.exit(1)
