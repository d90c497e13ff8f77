"""API key commands."""

from typing import Optional

import click

from ...exceptions import AlgoliaException
from ...security import generate_secured_api_key
from ..utils import console, fail, open_client, print_json


@click.command()
@click.pass_context
def keys(ctx: click.Context) -> None:
    """List the user keys and their ACLs."""
    try:
        with open_client(ctx) as client:
            print_json(client.list_user_keys())
    except AlgoliaException as e:
        fail(e)


@click.command(name="secured-key")
@click.argument("private_api_key")
@click.argument("tag_filters")
@click.option("--user-token", default=None, help="Token identifying the end user")
def secured_key(
    private_api_key: str, tag_filters: str, user_token: Optional[str]
) -> None:
    """Derive a secured API key restricted to TAG_FILTERS (no network call)."""
    console.print(generate_secured_api_key(private_api_key, tag_filters, user_token))
