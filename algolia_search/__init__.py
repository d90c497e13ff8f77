"""
Algolia Search Client - Python client for the hosted search API

This package gives applications programmatic access to a hosted search
service: index lifecycle, API key management, log retrieval, and single or
batched search queries.

Key Features:
- Host failover across the distributed search network and fallback hosts
- Separate timeouts for connect, regular calls and searches
- Immutable, canonically encoded search parameters
- Secured API keys derived locally with HMAC-SHA256
- Typed errors separating rejected requests from unreachable hosts

License: MIT
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("algolia-search-client")
except PackageNotFoundError:
    __version__ = "0.0.0"

from .client import SearchClient  # noqa: E402
from .exceptions import (  # noqa: E402
    AlgoliaException,
    ConfigError,
    ErrorKind,
    ProgrammingError,
    ServiceError,
)
from .index import Index  # noqa: E402
from .query import (  # noqa: E402
    IndexedQuery,
    QueryParams,
    QueryType,
    RemoveWordsType,
    TypoTolerance,
)
from .security import generate_secured_api_key  # noqa: E402

__all__ = [
    "__version__",
    "AlgoliaException",
    "ConfigError",
    "ErrorKind",
    "Index",
    "IndexedQuery",
    "ProgrammingError",
    "QueryParams",
    "QueryType",
    "RemoveWordsType",
    "SearchClient",
    "ServiceError",
    "TypoTolerance",
    "generate_secured_api_key",
]
