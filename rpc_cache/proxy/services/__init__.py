"""
Services package.

Provides request orchestration and external integrations.
"""

from .dispatcher import ProxyDispatcher
from .node_pool import NodePool
from .response_cache import InMemoryResponseCache, ResponseCache
from .upstream_client import UpstreamClient

__all__ = [
    "InMemoryResponseCache",
    "NodePool",
    "ProxyDispatcher",
    "ResponseCache",
    "UpstreamClient",
]
