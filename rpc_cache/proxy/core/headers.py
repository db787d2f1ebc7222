"""
Header filtering between the client and the upstream nodes.
"""

from typing import Iterable, List, Tuple

HOP_BY_HOP_REQUEST_HEADERS = frozenset(
    {
        "host",
        "content-length",
        "connection",
        "keep-alive",
        "transfer-encoding",
        "te",
        "trailer",
        "upgrade",
        "proxy-authorization",
        "proxy-connection",
    }
)

# httpx has already decoded and de-chunked the body by the time we relay it.
NON_RELAYABLE_RESPONSE_HEADERS = frozenset(
    {
        "content-encoding",
        "content-length",
        "transfer-encoding",
        "connection",
    }
)


def upstream_request_headers(headers: Iterable[Tuple[str, str]]) -> List[Tuple[str, str]]:
    return [
        (name, value)
        for name, value in headers
        if name.lower() not in HOP_BY_HOP_REQUEST_HEADERS
    ]


def relayable_response_headers(headers: Iterable[Tuple[str, str]]) -> List[Tuple[str, str]]:
    return [
        (name, value)
        for name, value in headers
        if name.lower() not in NON_RELAYABLE_RESPONSE_HEADERS
    ]
