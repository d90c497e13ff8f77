"""Secured API key generation."""

import hashlib
import hmac
from typing import Optional, Sequence, Union


def generate_secured_api_key(
    private_api_key: str,
    tag_filters: Union[str, Sequence[str]],
    user_token: Optional[str] = None,
) -> str:
    """Generate a secured API key restricted by tag filters.

    The key is the hex HMAC-SHA256 of the tag filters followed by the user
    token, keyed by the private API key. The backend recomputes it to check
    the restriction, so no server call is needed.

    Args:
        private_api_key: Private API key used as the HMAC secret
        tag_filters: Tag filters applied to queries, as a string or a list of tags
        user_token: Optional token identifying the current user

    Returns:
        Lower-case hexadecimal digest
    """
    if not isinstance(tag_filters, str):
        tag_filters = ",".join(tag_filters)
    message = tag_filters + (user_token or "")
    return hmac.new(
        private_api_key.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


__all__ = ["generate_secured_api_key"]
