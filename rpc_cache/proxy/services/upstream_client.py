"""
Upstream Client

Forwards an RPC call to a chosen node over the shared httpx.AsyncClient.
"""

import logging
from typing import Optional

import httpx

from ..core.exceptions import UpstreamTimeoutError, UpstreamUnreachableError
from ..core.headers import upstream_request_headers
from ..models import InboundRequest

logger = logging.getLogger("proxy.upstream_client")


class UpstreamClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        timeout: Optional[float] = None,
        forward_query_string: bool = True,
    ):
        """
        Args:
            client: Shared httpx.AsyncClient
            timeout: Per-request timeout in seconds (None waits indefinitely)
            forward_query_string: Append the inbound query string to the target URL
        """
        self.client = client
        self.timeout = timeout
        self.forward_query_string = forward_query_string

    def target_url(self, node: str, request: InboundRequest) -> str:
        url = node + request.wire_path
        if self.forward_query_string and request.query:
            url = f"{url}?{request.query}"
        return url

    async def forward(self, node: str, request: InboundRequest) -> httpx.Response:
        """
        Send the request to node, reusing its method, headers and body.

        Raises:
            UpstreamTimeoutError: node did not answer in time
            UpstreamUnreachableError: transport failure
        """
        url = self.target_url(node, request)
        logger.debug(f"Forwarding {request.method} to {url}")

        try:
            return await self.client.request(
                request.method,
                url,
                headers=upstream_request_headers(request.headers),
                content=request.body if request.method == "POST" else None,
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            logger.warning(
                f"Upstream request timed out: {url}",
                extra={"node": node, "target_url": url, "timeout": self.timeout},
            )
            raise UpstreamTimeoutError(node, e) from e
        except httpx.RequestError as e:
            logger.error(
                f"Upstream request failed for node '{node}'",
                extra={
                    "node": node,
                    "target_url": url,
                    "error_type": type(e).__name__,
                    "error_detail": str(e),
                },
            )
            raise UpstreamUnreachableError(node, e) from e
