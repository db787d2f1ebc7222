from rpc_cache.proxy.core.cache_key import body_digest, key_for_get, key_for_post

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_get_key_is_full_url():
    url = "https://proxy.test/chains/main/blocks/head?metadata=always"
    assert key_for_get(url) == url


def test_body_digest_is_lowercase_hex_sha256():
    assert body_digest(b"") == EMPTY_SHA256
    digest = body_digest(b'{"key": "value"}')
    assert len(digest) == 64
    assert digest == digest.lower()


def test_post_key_appends_digest_to_path():
    body = b'[{"data": "00", "type": "bytes"}]'
    path = "/chains/main/blocks/head/helpers/scripts/pack_data"
    key = key_for_post("https://proxy.test" + path, path, body)

    assert key == "https://proxy.test" + path + body_digest(body)


def test_post_key_keeps_query_string():
    key = key_for_post("http://proxy.test/chains/main/x?a=1", "/chains/main/x", b"")
    assert key == f"http://proxy.test/chains/main/x{EMPTY_SHA256}?a=1"


def test_identical_bodies_share_a_key():
    url, path = "http://proxy.test/chains/main/run", "/chains/main/run"
    assert key_for_post(url, path, b'{"a": 1}') == key_for_post(url, path, b'{"a": 1}')
    assert key_for_post(url, path, b"") == key_for_post(url, path, b"")


def test_distinct_bodies_get_distinct_keys():
    url, path = "http://proxy.test/chains/main/run", "/chains/main/run"
    keys = {key_for_post(url, path, f'{{"n": {n}}}'.encode()) for n in range(200)}
    assert len(keys) == 200
