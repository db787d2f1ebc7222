import os

# Keep log records flowing to the root logger so caplog sees them.
os.environ["LOG_CONFIG_PATH"] = "/nonexistent/proxy_log.yaml"

import random

import httpx
import pytest
import respx

from rpc_cache.proxy.core.ttl_policy import TTLPolicy
from rpc_cache.proxy.services.dispatcher import ProxyDispatcher
from rpc_cache.proxy.services.node_pool import NodePool
from rpc_cache.proxy.services.response_cache import InMemoryResponseCache
from rpc_cache.proxy.services.upstream_client import UpstreamClient

NODE = "https://node-a.test"


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return InMemoryResponseCache(max_size=100, timer=clock)


@pytest.fixture
def upstream():
    """respx router standing in for the upstream nodes."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def http_client():
    return httpx.AsyncClient()


@pytest.fixture
def make_dispatcher(cache, http_client):
    def _make(nodes=(NODE,), preserve_upstream_status=False, timeout=None):
        return ProxyDispatcher(
            node_pool=NodePool(list(nodes), rng=random.Random(7)),
            ttl_policy=TTLPolicy(),
            cache=cache,
            upstream=UpstreamClient(http_client, timeout=timeout),
            preserve_upstream_status=preserve_upstream_status,
        )

    return _make


@pytest.fixture
def dispatcher(make_dispatcher):
    return make_dispatcher()


@pytest.fixture
def main_app(dispatcher):
    from rpc_cache.proxy.api.deps import get_dispatcher
    from rpc_cache.proxy.main import app

    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    yield app
    app.dependency_overrides = {}


@pytest.fixture
def client(main_app):
    from fastapi.testclient import TestClient

    return TestClient(main_app)
