"""
Search Client for the Algolia Search Client

This module provides the entry point of the library. A SearchClient holds the
credentials, resolved hosts, timeouts and per-client headers, and maps each
API operation to a path and JSON body handed to the request dispatcher.

Read operations (GET, and POST searches) go to the read hosts; writes go to
the write hosts. Searches use the search timeout, everything else the socket
timeout.

Example Usage:
    from algolia_search import SearchClient, QueryParams

    with SearchClient("APP_ID", "API_KEY") as client:
        client.list_indexes()
        index = client.init_index("contacts")
        index.search(QueryParams(query="jimmie").with_hits_per_page(5))
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import quote

import httpx

from . import __version__
from .config import ClientConfig
from .hosts import resolve_hosts
from .index import Index
from .query import IndexedQuery, QueryParams, build_batch_request
from .security import generate_secured_api_key
from .transport import RequestDispatcher, TimeoutBudget

logger = logging.getLogger(__name__)

USER_AGENT = f"Algolia for Python {__version__}"


def _quote_path(segment: str) -> str:
    return quote(segment, safe="")


class SearchClient:
    """Client for the hosted search API."""

    def __init__(
        self,
        application_id: str,
        api_key: str,
        hosts: Optional[Sequence[str]] = None,
        *,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize search client.

        Args:
            application_id: Application ID from the dashboard
            api_key: API key for the application
            hosts: Hosts to use instead of the ones derived from the application ID
            http_client: HTTP client to share; the client creates and owns one if omitted

        Raises:
            ConfigError: If the application ID or API key is empty
        """
        self.host_set = resolve_hosts(application_id, api_key, hosts)
        self.application_id = application_id
        self.api_key = api_key
        self.timeouts = TimeoutBudget()
        self.extra_headers: Dict[str, str] = {}
        self.user_token: Optional[str] = None
        self.tag_filters: Optional[str] = None

        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.Client()
        self.dispatcher = RequestDispatcher(self.http_client)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        http_client: Optional[httpx.Client] = None,
    ) -> "SearchClient":
        """Create a client from a loaded configuration."""
        client = cls(
            config.application_id,
            config.api_key,
            config.hosts,
            http_client=http_client,
        )
        client.set_timeout(
            config.connect_timeout_ms,
            config.socket_timeout_ms,
            config.search_timeout_ms,
        )
        for name, value in config.extra_headers.items():
            client.set_extra_header(name, value)
        client.set_user_token(config.user_token)
        client.set_security_tags(config.tag_filters)
        return client

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            self.http_client.close()

    def __enter__(self) -> "SearchClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # Per-client settings

    def set_extra_header(self, name: str, value: str) -> None:
        """Add a header sent with every request."""
        self.extra_headers[name] = value

    def set_timeout(
        self,
        connect_ms: int,
        socket_ms: int,
        search_ms: Optional[int] = None,
    ) -> None:
        """Set timeouts in milliseconds, applied from the next call.

        Args:
            connect_ms: Connect timeout
            socket_ms: Read timeout for non-search calls
            search_ms: Read timeout for searches, unchanged if None
        """
        self.timeouts.connect_ms = connect_ms
        self.timeouts.socket_ms = socket_ms
        if search_ms is not None:
            self.timeouts.search_ms = search_ms

    def set_security_tags(self, tag_filters: Optional[str]) -> None:
        """Send tag filters with every request, for use with a secured API key."""
        self.tag_filters = tag_filters

    def set_user_token(self, user_token: Optional[str]) -> None:
        """Send a user token with every request, for use with a secured API key."""
        self.user_token = user_token

    # Indexes

    def list_indexes(self) -> Dict[str, Any]:
        """List all existing indexes.

        Returns:
            Object in the form {"items": [{"name": "contacts", "createdAt": "..."}]}
        """
        return self.request("GET", "/1/indexes/")

    def delete_index(self, index_name: str) -> Dict[str, Any]:
        """Delete an index; the answer contains a "deletedAt" attribute."""
        return self.request("DELETE", f"/1/indexes/{_quote_path(index_name)}")

    def move_index(self, src_index_name: str, dst_index_name: str) -> Dict[str, Any]:
        """Move an index, overwriting the destination if it exists."""
        return self._index_operation("move", src_index_name, dst_index_name)

    def copy_index(self, src_index_name: str, dst_index_name: str) -> Dict[str, Any]:
        """Copy an index, overwriting the destination if it exists."""
        return self._index_operation("copy", src_index_name, dst_index_name)

    def _index_operation(
        self, operation: str, src_index_name: str, dst_index_name: str
    ) -> Dict[str, Any]:
        body = {"operation": operation, "destination": dst_index_name}
        return self.request(
            "POST", f"/1/indexes/{_quote_path(src_index_name)}/operation", body
        )

    def init_index(self, index_name: str) -> Index:
        """Get an index object; no server call is made."""
        return Index(self, index_name)

    # Logs

    def get_logs(
        self,
        offset: Optional[int] = None,
        length: Optional[int] = None,
        only_errors: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """Return the latest log entries (10 by default).

        Args:
            offset: First entry to retrieve, 0 being the most recent
            length: Maximum number of entries, at most 1000
            only_errors: Only retrieve entries with an error
        """
        params: List[str] = []
        if offset is not None:
            params.append(f"offset={int(offset)}")
        if length is not None:
            params.append(f"length={int(length)}")
        if only_errors is not None:
            params.append(f"onlyErrors={'true' if only_errors else 'false'}")

        path = "/1/logs"
        if params:
            path += "?" + "&".join(params)
        return self.request("GET", path)

    # API keys

    def list_user_keys(self) -> Dict[str, Any]:
        """List all user keys with their ACLs."""
        return self.request("GET", "/1/keys")

    def get_user_key_acl(self, key: str) -> Dict[str, Any]:
        return self.request("GET", f"/1/keys/{_quote_path(key)}")

    def delete_user_key(self, key: str) -> Dict[str, Any]:
        return self.request("DELETE", f"/1/keys/{_quote_path(key)}")

    def add_user_key(
        self,
        acls: Sequence[str],
        validity: int = 0,
        max_queries_per_ip_per_hour: int = 0,
        max_hits_per_query: int = 0,
        indexes: Optional[Sequence[str]] = None,
    ) -> Dict[str, Any]:
        """Create a user key.

        Args:
            acls: Allowed operations, among search, addObject, deleteObject,
                deleteIndex, settings and editSettings
            validity: Seconds before the key is removed (0 means no limit)
            max_queries_per_ip_per_hour: API calls allowed per IP per hour (0 means no limit)
            max_hits_per_query: Hits retrievable per call (0 means no limit)
            indexes: Indexes the key is restricted to
        """
        body = self._user_key_body(
            acls, validity, max_queries_per_ip_per_hour, max_hits_per_query, indexes
        )
        return self.request("POST", "/1/keys", body)

    def update_user_key(
        self,
        key: str,
        acls: Sequence[str],
        validity: int = 0,
        max_queries_per_ip_per_hour: int = 0,
        max_hits_per_query: int = 0,
        indexes: Optional[Sequence[str]] = None,
    ) -> Dict[str, Any]:
        """Update a user key; arguments are the same as add_user_key."""
        body = self._user_key_body(
            acls, validity, max_queries_per_ip_per_hour, max_hits_per_query, indexes
        )
        return self.request("PUT", f"/1/keys/{_quote_path(key)}", body)

    @staticmethod
    def _user_key_body(
        acls: Sequence[str],
        validity: int,
        max_queries_per_ip_per_hour: int,
        max_hits_per_query: int,
        indexes: Optional[Sequence[str]],
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "acl": list(acls),
            "validity": validity,
            "maxQueriesPerIPPerHour": max_queries_per_ip_per_hour,
            "maxHitsPerQuery": max_hits_per_query,
        }
        if indexes is not None:
            body["indexes"] = list(indexes)
        return body

    def generate_secured_api_key(
        self,
        private_api_key: str,
        tag_filters: Union[str, Sequence[str]],
        user_token: Optional[str] = None,
    ) -> str:
        """Generate a secured API key; see security.generate_secured_api_key."""
        return generate_secured_api_key(private_api_key, tag_filters, user_token)

    # Search

    def multiple_queries(
        self,
        queries: Sequence[Union[IndexedQuery, Tuple[str, QueryParams]]],
    ) -> Dict[str, Any]:
        """Query several indexes with one API call.

        Results come back in the same order as the queries.
        """
        indexed = [
            q if isinstance(q, IndexedQuery) else IndexedQuery(*q) for q in queries
        ]
        return self.request(
            "POST", "/1/indexes/*/queries", build_batch_request(indexed), search=True
        )

    # Transport

    def build_headers(self) -> Dict[str, str]:
        """Headers sent with every request."""
        headers = {
            "X-Algolia-Application-Id": self.application_id,
            "X-Algolia-API-Key": self.api_key,
        }
        headers.update(self.extra_headers)
        headers["User-Agent"] = USER_AGENT
        if self.user_token is not None:
            headers["X-Algolia-UserToken"] = self.user_token
        if self.tag_filters is not None:
            headers["X-Algolia-TagFilters"] = self.tag_filters
        return headers

    def request(
        self,
        method: str,
        path: str,
        body: Optional[Mapping[str, Any]] = None,
        search: bool = False,
    ) -> Dict[str, Any]:
        """Send a request through the dispatcher.

        GET requests and searches go to the read hosts, other writes to the
        write hosts.

        Args:
            method: HTTP verb
            path: Request path
            body: JSON body
            search: Whether the call is a search (read hosts, search timeout)

        Raises:
            ProgrammingError: If the verb is unsupported or cannot carry a body
            ServiceError: If the service rejects the call or no host answers
        """
        read = search or str(method).upper() == "GET"
        hosts = self.host_set.read_hosts if read else self.host_set.write_hosts
        timeouts = self.timeouts.snapshot()
        return self.dispatcher.dispatch(
            method,
            path,
            body,
            hosts=hosts,
            connect_timeout_ms=timeouts.connect_ms,
            socket_timeout_ms=timeouts.socket_timeout_for(search),
            headers=self.build_headers(),
        )


__all__ = ["SearchClient", "USER_AGENT"]
