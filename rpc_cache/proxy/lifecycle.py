"""
Where: rpc_cache/proxy/lifecycle.py
What: Proxy startup/shutdown orchestration for shared resources.
Why: Keep main.py focused on app assembly.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from rpc_cache.common.core.http_client import HttpClientFactory

from .config import ProxyConfig
from .core.ttl_policy import TTLPolicy
from .services.dispatcher import ProxyDispatcher
from .services.node_pool import NodePool
from .services.response_cache import InMemoryResponseCache, ResponseCache
from .services.upstream_client import UpstreamClient

logger = logging.getLogger("proxy.main")


def build_dispatcher(
    proxy_config: ProxyConfig, client, cache: Optional[ResponseCache] = None
) -> ProxyDispatcher:
    """Assemble a dispatcher and its collaborators from configuration."""
    if cache is None:
        cache = InMemoryResponseCache(max_size=proxy_config.CACHE_MAX_ENTRIES)

    return ProxyDispatcher(
        node_pool=NodePool(proxy_config.UPSTREAM_NODES),
        ttl_policy=TTLPolicy.from_config(proxy_config),
        cache=cache,
        upstream=UpstreamClient(
            client,
            timeout=proxy_config.upstream_timeout,
            forward_query_string=proxy_config.FORWARD_QUERY_STRING,
        ),
        cacheable_prefix=proxy_config.CACHEABLE_PATH_PREFIX,
        broadcast_path=proxy_config.BROADCAST_PATH,
        preserve_upstream_status=proxy_config.PRESERVE_UPSTREAM_STATUS,
    )


@asynccontextmanager
async def manage_lifespan(app: FastAPI, proxy_config: ProxyConfig) -> AsyncIterator[None]:
    """Manage application lifecycle."""
    factory = HttpClientFactory(proxy_config)
    factory.configure_global_settings()
    client = factory.create_async_client(timeout=proxy_config.upstream_timeout)

    try:
        app.state.http_client = client
        app.state.dispatcher = build_dispatcher(proxy_config, client)

        logger.info(
            "Proxy initialized with %d upstream nodes",
            len(proxy_config.UPSTREAM_NODES),
            extra={"nodes": proxy_config.UPSTREAM_NODES},
        )

        yield
    finally:
        logger.info("Proxy shutting down, closing http client.")
        await client.aclose()
