"""Log retrieval command."""

from typing import Optional

import click

from ...exceptions import AlgoliaException
from ..utils import fail, open_client, print_json


@click.command()
@click.option("--offset", type=int, default=None, help="First entry, 0 is the most recent")
@click.option("--length", type=int, default=None, help="Number of entries (max 1000)")
@click.option("--only-errors", is_flag=True, default=False, help="Only entries with an error")
@click.pass_context
def logs(
    ctx: click.Context,
    offset: Optional[int],
    length: Optional[int],
    only_errors: bool,
) -> None:
    """Show the latest API log entries."""
    try:
        with open_client(ctx) as client:
            print_json(client.get_logs(offset, length, only_errors or None))
    except AlgoliaException as e:
        fail(e)
