"""
Core logic package.

Provides key derivation, cache policy, annotation and error rendering.
"""

from .annotator import annotate
from .cache_key import body_digest, key_for_get, key_for_post
from .exceptions import render_error
from .ttl_policy import TTLPolicy
