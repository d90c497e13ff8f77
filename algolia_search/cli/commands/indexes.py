"""Index listing command."""

import click
from rich.table import Table

from ...exceptions import AlgoliaException
from ..utils import console, fail, open_client


@click.command()
@click.pass_context
def indexes(ctx: click.Context) -> None:
    """List the indexes of the application."""
    try:
        with open_client(ctx) as client:
            result = client.list_indexes()
    except AlgoliaException as e:
        fail(e)

    items = result.get("items", [])
    if not items:
        console.print("No indexes found.")
        return

    table = Table(
        title="Indexes",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Name", justify="left", style="cyan")
    table.add_column("Entries", justify="right", style="green")
    table.add_column("Updated", justify="left")

    for item in items:
        table.add_row(
            str(item.get("name", "")),
            str(item.get("entries", "")),
            str(item.get("updatedAt") or item.get("createdAt", "")),
        )

    console.print(table)
