import uuid

from rpc_cache.common.core import request_context


def test_set_request_id_generates_uuid():
    request_context.clear_request_id()

    req_id = request_context.set_request_id()

    uuid.UUID(req_id)
    assert request_context.get_request_id() == req_id


def test_set_request_id_keeps_supplied_value():
    assert request_context.set_request_id("abc-123") == "abc-123"
    assert request_context.get_request_id() == "abc-123"


def test_clear_request_id():
    request_context.set_request_id()
    request_context.clear_request_id()

    assert request_context.get_request_id() is None
