"""
Data model definitions package.
"""

from .cache_entry import CacheEntry
from .inbound import InboundRequest

__all__ = [
    "CacheEntry",
    "InboundRequest",
]
