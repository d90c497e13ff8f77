"""
Search Command for the Algolia Search CLI

Runs a query against one index and prints the raw answer as JSON.

Example Usage:
    $ algolia-search search contacts "jimmie"
    $ algolia-search search contacts "jimmie" --hits-per-page 5 --page 2
    $ algolia-search search products "jeans" --tag-filters "(men,women),sale"
"""

from typing import Optional

import click

from ...exceptions import AlgoliaException
from ...query import QueryParams
from ..utils import fail, open_client, print_json


@click.command()
@click.argument("index_name")
@click.argument("query")
@click.option("--page", type=int, default=0, help="Page to retrieve (0-based)")
@click.option("--hits-per-page", type=int, default=20, help="Number of hits per page")
@click.option("--tag-filters", default=None, help="Tag filters, e.g. \"(a,b),c\"")
@click.pass_context
def search(
    ctx: click.Context,
    index_name: str,
    query: str,
    page: int,
    hits_per_page: int,
    tag_filters: Optional[str],
) -> None:
    """Search INDEX_NAME for QUERY."""
    params = (
        QueryParams(query=query)
        .with_page(page)
        .with_hits_per_page(hits_per_page)
        .with_tag_filters(tag_filters)
    )
    try:
        with open_client(ctx) as client:
            result = client.init_index(index_name).search(params)
    except AlgoliaException as e:
        fail(e)

    print_json(result)
