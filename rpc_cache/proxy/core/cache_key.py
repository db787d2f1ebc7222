"""
Cache key derivation.

GET requests are keyed by their full URL. POST requests on cacheable paths
carry the RPC call in the body, so the key is a GET-shaped URL whose path is
suffixed with the SHA-256 of the body.
"""

import hashlib

from starlette.datastructures import URL


def key_for_get(url: str) -> str:
    return url


def body_digest(body: bytes) -> str:
    """Lowercase hex SHA-256 of the request body."""
    return hashlib.sha256(body).hexdigest()


def key_for_post(url: str, path: str, body: bytes) -> str:
    """
    Build the synthetic key for a cacheable POST.

    Args:
        url: Full inbound URL (scheme, host, path, query)
        path: Inbound request path
        body: Raw request body, possibly empty

    Returns:
        The inbound URL with its path replaced by ``path + body_digest(body)``
    """
    return str(URL(url).replace(path=path + body_digest(body)))
