"""
Proxy Dispatcher - Service Layer

Standardizes the flow: InboundRequest -> (cache | upstream) -> Response.
"""

import logging

from fastapi import BackgroundTasks
from fastapi.responses import Response

from ..core import cache_key
from ..core.annotator import annotate
from ..core.exceptions import (
    ALLOWED_METHODS,
    ErrorKind,
    MethodNotAllowedError,
    ProxyError,
    RPCNotAllowedError,
    UpstreamFailureError,
    render_error,
)
from ..core.headers import relayable_response_headers
from ..core.ttl_policy import TTLPolicy
from ..models import CacheEntry, InboundRequest
from .node_pool import NodePool
from .response_cache import ResponseCache
from .upstream_client import UpstreamClient

logger = logging.getLogger("proxy.dispatcher")


class ProxyDispatcher:
    """
    Orchestrates the handling of one RPC call.

    Holds no per-request state; all collaborators are injected at construction.
    """

    def __init__(
        self,
        node_pool: NodePool,
        ttl_policy: TTLPolicy,
        cache: ResponseCache,
        upstream: UpstreamClient,
        cacheable_prefix: str = "/chains",
        broadcast_path: str = "/injection/operation",
        preserve_upstream_status: bool = False,
    ):
        self.node_pool = node_pool
        self.ttl_policy = ttl_policy
        self.cache = cache
        self.upstream = upstream
        self.cacheable_prefix = cacheable_prefix
        self.broadcast_path = broadcast_path
        self.preserve_upstream_status = preserve_upstream_status

    def validate(self, request: InboundRequest) -> None:
        """
        Raises:
            MethodNotAllowedError: method is not GET or POST
            RPCNotAllowedError: path is outside the allowed surface
        """
        if request.method not in ALLOWED_METHODS:
            raise MethodNotAllowedError(request.method)
        if not self.is_cacheable(request.path) and request.path != self.broadcast_path:
            raise RPCNotAllowedError(request.path)

    def is_cacheable(self, path: str) -> bool:
        return path.startswith(self.cacheable_prefix)

    def cache_key_for(self, request: InboundRequest) -> str:
        if request.method == "GET":
            return cache_key.key_for_get(request.url)
        return cache_key.key_for_post(request.url, request.wire_path, request.body)

    async def dispatch(self, request: InboundRequest, background: BackgroundTasks) -> Response:
        """
        Answer an RPC call. Never raises: every failure becomes one of the
        canonical error responses.
        """
        try:
            self.validate(request)
            if request.method == "POST" and not self.is_cacheable(request.path):
                return await self._forward_uncached(request)
            return await self._serve_cached(request, background)
        except ProxyError as e:
            if e.kind in (ErrorKind.UPSTREAM_FAILURE, ErrorKind.UPSTREAM_TIMEOUT):
                logger.warning(str(e), extra={"error_kind": e.kind.value, "path": request.path})
            else:
                logger.info(str(e), extra={"error_kind": e.kind.value, "path": request.path})
            return render_error(e)
        except Exception as e:
            logger.exception(
                f"Unexpected error in dispatcher: {e}",
                extra={"method": request.method, "path": request.path},
            )
            return render_error(e)

    async def _serve_cached(self, request: InboundRequest, background: BackgroundTasks) -> Response:
        key = self.cache_key_for(request)

        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit", extra={"cache_key": key, "node": cached.node})
            return cached.to_response()

        logger.debug("Cache miss", extra={"cache_key": key})
        node = self.node_pool.pick()
        upstream_response = await self.upstream.forward(node, request)

        if upstream_response.status_code != 200:
            return self._upstream_failure(node, upstream_response)

        ttl = self.ttl_policy.ttl_for(request.path)
        entry = annotate(upstream_response, ttl, node)

        # The client and the cache each get their own copy.
        background.add_task(self.cache.put, key, entry.model_copy(deep=True), ttl)
        return entry.to_response()

    async def _forward_uncached(self, request: InboundRequest) -> Response:
        node = self.node_pool.pick()
        upstream_response = await self.upstream.forward(node, request)

        if upstream_response.status_code != 200:
            return self._upstream_failure(node, upstream_response)

        logger.debug("Relayed broadcast operation", extra={"node": node})
        return self._relay(node, upstream_response)

    def _upstream_failure(self, node: str, upstream_response) -> Response:
        if self.preserve_upstream_status:
            logger.warning(
                f"Relaying upstream status {upstream_response.status_code} from {node}",
                extra={"node": node, "upstream_status": upstream_response.status_code},
            )
            return self._relay(node, upstream_response)
        raise UpstreamFailureError(node, upstream_response.status_code)

    def _relay(self, node: str, upstream_response) -> Response:
        """Pass an upstream reply through without annotation."""
        return CacheEntry(
            status_code=upstream_response.status_code,
            headers=relayable_response_headers(upstream_response.headers.multi_items()),
            body=upstream_response.content,
            node=node,
        ).to_response()
