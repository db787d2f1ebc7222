"""
Cached response model.
"""

from typing import List, Tuple

from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field


class CacheEntry(BaseModel):
    """
    A response as stored in, and served from, the response cache.

    ``expires_at`` is set by the cache when the entry is written.
    """

    model_config = ConfigDict(frozen=True)

    status_code: int
    headers: List[Tuple[str, str]] = Field(default_factory=list)
    body: bytes = b""
    node: str = ""
    ttl: int = 0
    expires_at: float = 0.0

    def to_response(self) -> Response:
        response = Response(content=self.body, status_code=self.status_code)
        # Response() may set content-length; replay the stored headers after it.
        for name, value in self.headers:
            response.headers.append(name, value)
        return response
