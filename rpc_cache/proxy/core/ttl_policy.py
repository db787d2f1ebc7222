"""
Cache lifetime policy.

Head-of-chain data changes every block; anything addressed by level or hash
is immutable and can be kept much longer.
"""


class TTLPolicy:
    def __init__(self, head_ttl: int = 10, default_ttl: int = 600, head_pattern: str = "blocks/head"):
        self.head_ttl = head_ttl
        self.default_ttl = default_ttl
        self.head_pattern = head_pattern

    @classmethod
    def from_config(cls, proxy_config) -> "TTLPolicy":
        return cls(
            head_ttl=proxy_config.HEAD_CACHE_TTL,
            default_ttl=proxy_config.DEFAULT_CACHE_TTL,
            head_pattern=proxy_config.HEAD_PATH_PATTERN,
        )

    def ttl_for(self, path: str) -> int:
        if self.head_pattern in path:
            return self.head_ttl
        return self.default_ttl
