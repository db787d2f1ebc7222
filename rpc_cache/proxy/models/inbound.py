"""
Inbound request model.

Decouples the dispatcher from Starlette's Request object.
"""

from typing import List, Optional, Tuple

from fastapi import Request
from pydantic import BaseModel, Field


class InboundRequest(BaseModel):
    """
    An RPC call as received by the proxy.

    ``path`` is percent-decoded and used for routing decisions. ``raw_path``
    is the path exactly as the client sent it; ``url`` is built from it.
    ``headers`` keeps order and repeated names.
    """

    method: str
    url: str
    path: str
    raw_path: str = ""
    query: str = ""
    headers: List[Tuple[str, str]] = Field(default_factory=list)
    body: bytes = b""

    @property
    def wire_path(self) -> str:
        """Path to send upstream and to derive keys from."""
        return self.raw_path or self.path

    @classmethod
    def from_request(cls, request: Request, body: Optional[bytes] = None) -> "InboundRequest":
        raw = request.scope.get("raw_path")
        if raw:
            # Some servers leave the query string on raw_path.
            raw_path = raw.split(b"?", 1)[0].decode("latin-1")
        else:
            raw_path = request.scope.get("path") or request.url.path
        query = request.scope.get("query_string", b"").decode("latin-1")

        url = f"{request.url.scheme}://{request.url.netloc}{raw_path}"
        if query:
            url = f"{url}?{query}"

        return cls(
            method=request.method.upper(),
            url=url,
            path=request.scope.get("path") or request.url.path,
            raw_path=raw_path,
            query=query,
            headers=list(request.headers.items()),
            body=body or b"",
        )
