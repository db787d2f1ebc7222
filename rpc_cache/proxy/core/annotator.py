"""
Response annotation.

Stamps cache lifetime and provenance onto an upstream reply before it is
returned and cached.
"""

import httpx

from ..models import CacheEntry
from .headers import relayable_response_headers


def cache_control_value(ttl: int) -> str:
    return f"max-age={ttl}, s-maxage={ttl}"


def annotate(upstream: httpx.Response, ttl: int, node: str) -> CacheEntry:
    """
    Copy an upstream reply into a CacheEntry with Cache-Control and
    Node-Origin appended.

    Existing headers with the same names are kept; the new values are added
    after them.
    """
    headers = relayable_response_headers(upstream.headers.multi_items())
    headers.append(("Cache-Control", cache_control_value(ttl)))
    headers.append(("Node-Origin", node))

    return CacheEntry(
        status_code=upstream.status_code,
        headers=headers,
        body=upstream.content,
        node=node,
        ttl=ttl,
    )
