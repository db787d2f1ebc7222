"""
Proxy configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

import sys
from typing import List

from pydantic import Field, field_validator
from rpc_cache.common.core.config import BaseAppConfig

DEFAULT_UPSTREAM_NODES = [
    "https://mainnet.smartpy.io",
    "https://mainnet.api.tez.ie",
    "https://tezos-prod.cryptonomic-infra.tech",
    "https://rpc.tzkt.io/mainnet",
]


class ProxyConfig(BaseAppConfig):
    """
    Configuration management for the RPC cache proxy.
    """

    # Server settings
    UVICORN_BIND_ADDR: str = Field(default="0.0.0.0:8000", description="Listen address")
    LOG_CONFIG_PATH: str = Field(
        default="config/proxy_log.yaml", description="Logging definition file path"
    )

    # Upstream
    UPSTREAM_NODES: List[str] = Field(
        default_factory=lambda: list(DEFAULT_UPSTREAM_NODES),
        description="Base URLs of interchangeable RPC nodes (JSON list)",
    )
    UPSTREAM_TIMEOUT: float = Field(
        default=30.0, ge=0, description="Upstream request timeout (seconds, 0 disables)"
    )
    FORWARD_QUERY_STRING: bool = Field(
        default=True, description="Append the inbound query string to the upstream URL"
    )
    PRESERVE_UPSTREAM_STATUS: bool = Field(
        default=False, description="Relay non-200 upstream replies instead of a generic 404"
    )

    # Allowed RPC surface
    CACHEABLE_PATH_PREFIX: str = Field(default="/chains", description="Cacheable RPC prefix")
    BROADCAST_PATH: str = Field(
        default="/injection/operation", description="Non-cacheable operation path"
    )

    # Cache policy
    HEAD_PATH_PATTERN: str = Field(
        default="blocks/head", description="Path pattern marking head-of-chain data"
    )
    HEAD_CACHE_TTL: int = Field(default=10, ge=0, description="TTL for head data (seconds)")
    DEFAULT_CACHE_TTL: int = Field(default=600, ge=0, description="TTL for other data (seconds)")
    CACHE_MAX_ENTRIES: int = Field(default=10000, gt=0, description="In-memory cache bound")

    # FastAPI settings
    root_path: str = Field(default="", description="API root path (for proxy)")

    @field_validator("UPSTREAM_NODES")
    @classmethod
    def _normalize_nodes(cls, nodes: List[str]) -> List[str]:
        normalized = [node.strip().rstrip("/") for node in nodes if node.strip()]
        if not normalized:
            raise ValueError("UPSTREAM_NODES must contain at least one node URL")
        return normalized

    @property
    def upstream_timeout(self):
        """Timeout value for httpx; None when disabled."""
        return self.UPSTREAM_TIMEOUT or None


# Load config as a singleton.
# pydantic-settings reads environment variables during instantiation.
try:
    config = ProxyConfig()
except Exception as e:
    sys.stderr.write(f"Failed to load configuration: {e}\n")
    raise
