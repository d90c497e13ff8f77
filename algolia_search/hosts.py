"""Host resolution for read and write traffic."""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .exceptions import ConfigError

DSN_DOMAIN = "algolia.net"
FALLBACK_DOMAIN = "algolianet.com"
FALLBACK_COUNT = 3


@dataclass(frozen=True)
class HostSet:
    """Ordered host lists; order is the failover attempt order."""

    read_hosts: Tuple[str, ...]
    write_hosts: Tuple[str, ...]


def _fallback_hosts(application_id: str) -> Tuple[str, ...]:
    return tuple(
        f"{application_id}-{i}.{FALLBACK_DOMAIN}"
        for i in range(1, FALLBACK_COUNT + 1)
    )


def resolve_hosts(
    application_id: Optional[str],
    api_key: Optional[str],
    hosts: Optional[Sequence[str]] = None,
) -> HostSet:
    """Resolve the read and write host lists for an application.

    Search traffic goes to the distributed search network host first, while
    writes go to the primary host. Both share the same fallback hosts.

    Args:
        application_id: Application identifier
        api_key: API key, only checked for presence
        hosts: Explicit host list used for both paths

    Returns:
        Resolved host set

    Raises:
        ConfigError: If the application ID or API key is empty
    """
    if not application_id:
        raise ConfigError("AlgoliaSearch requires an application ID.")
    if not api_key:
        raise ConfigError("AlgoliaSearch requires an API key.")

    if hosts:
        explicit = tuple(hosts)
        return HostSet(read_hosts=explicit, write_hosts=explicit)

    fallbacks = _fallback_hosts(application_id)
    return HostSet(
        read_hosts=(f"{application_id}-dsn.{DSN_DOMAIN}",) + fallbacks,
        write_hosts=(f"{application_id}.{DSN_DOMAIN}",) + fallbacks,
    )


__all__ = ["HostSet", "resolve_hosts"]
