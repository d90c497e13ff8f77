"""Single index access."""

from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence, Union
from urllib.parse import quote, quote_plus

from .query import QueryParams, encode_query

if TYPE_CHECKING:
    from .client import SearchClient


class Index:
    """An index of the application, bound to the client that created it."""

    def __init__(self, client: "SearchClient", index_name: str) -> None:
        self.client = client
        self.index_name = index_name
        self.url_index_name = quote(index_name, safe="")

    def search(
        self, query: Optional[Union[QueryParams, str]] = None
    ) -> Dict[str, Any]:
        """Search the index.

        Args:
            query: Search parameters, or a plain query string

        Returns:
            Search answer containing "hits", "nbHits", "page", ...
        """
        if query is None or isinstance(query, str):
            query = QueryParams(query=query)

        path = f"/1/indexes/{self.url_index_name}"
        params = encode_query(query)
        if params:
            path += f"?{params}"
        return self.client.request("GET", path, search=True)

    def get_object(
        self, object_id: str, attributes: Optional[Sequence[str]] = None
    ) -> Dict[str, Any]:
        """Get an object by its objectID, optionally restricted to some attributes."""
        path = f"/1/indexes/{self.url_index_name}/{quote(object_id, safe='')}"
        if attributes is not None:
            path += f"?attributes={quote_plus(','.join(attributes))}"
        return self.client.request("GET", path)

    def get_settings(self) -> Dict[str, Any]:
        return self.client.request("GET", f"/1/indexes/{self.url_index_name}/settings")

    def delete(self) -> Dict[str, Any]:
        return self.client.delete_index(self.index_name)

    def __repr__(self) -> str:
        return f"Index({self.index_name!r})"


__all__ = ["Index"]
