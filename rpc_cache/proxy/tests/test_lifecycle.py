from fastapi.testclient import TestClient

from rpc_cache.proxy.config import ProxyConfig
from rpc_cache.proxy.lifecycle import build_dispatcher
from rpc_cache.proxy.services.dispatcher import ProxyDispatcher
from rpc_cache.proxy.services.response_cache import InMemoryResponseCache


def test_lifespan_wires_dispatcher_from_config():
    from rpc_cache.proxy.config import config
    from rpc_cache.proxy.main import app

    with TestClient(app):
        dispatcher = app.state.dispatcher
        assert isinstance(dispatcher, ProxyDispatcher)
        assert dispatcher.node_pool.nodes == tuple(config.UPSTREAM_NODES)
        assert isinstance(dispatcher.cache, InMemoryResponseCache)
        assert dispatcher.cache.max_size == config.CACHE_MAX_ENTRIES

    assert app.state.http_client.is_closed


def test_build_dispatcher_applies_config(monkeypatch):
    monkeypatch.setenv("UPSTREAM_NODES", '["https://only.test"]')
    monkeypatch.setenv("UPSTREAM_TIMEOUT", "2.5")
    monkeypatch.setenv("PRESERVE_UPSTREAM_STATUS", "true")
    proxy_config = ProxyConfig(_env_file=None)
    cache = InMemoryResponseCache(max_size=1)

    dispatcher = build_dispatcher(proxy_config, client=object(), cache=cache)

    assert dispatcher.node_pool.pick() == "https://only.test"
    assert dispatcher.upstream.timeout == 2.5
    assert dispatcher.preserve_upstream_status is True
    assert dispatcher.cache is cache
