from starlette.requests import Request

from rpc_cache.proxy.models import InboundRequest


def _scope(path, raw_path, query_string=b""):
    return {
        "type": "http",
        "method": "get",
        "scheme": "http",
        "server": ("proxy.test", 80),
        "path": path,
        "raw_path": raw_path,
        "query_string": query_string,
        "root_path": "",
        "headers": [(b"host", b"proxy.test"), (b"accept", b"application/json")],
    }


def test_from_request_keeps_encoded_path():
    request = Request(_scope("/chains/main/a?b", b"/chains/main/a%3Fb", b"x=1"))

    inbound = InboundRequest.from_request(request)

    assert inbound.method == "GET"
    assert inbound.path == "/chains/main/a?b"
    assert inbound.raw_path == "/chains/main/a%3Fb"
    assert inbound.wire_path == "/chains/main/a%3Fb"
    assert inbound.query == "x=1"
    assert inbound.url == "http://proxy.test/chains/main/a%3Fb?x=1"
    assert inbound.headers == [("host", "proxy.test"), ("accept", "application/json")]


def test_from_request_drops_query_left_on_raw_path():
    request = Request(_scope("/chains/main/blocks/head", b"/chains/main/blocks/head?x=1", b"x=1"))

    inbound = InboundRequest.from_request(request)

    assert inbound.raw_path == "/chains/main/blocks/head"
    assert inbound.url == "http://proxy.test/chains/main/blocks/head?x=1"


def test_wire_path_falls_back_to_path():
    inbound = InboundRequest(method="GET", url="http://proxy.test/chains", path="/chains")

    assert inbound.wire_path == "/chains"
