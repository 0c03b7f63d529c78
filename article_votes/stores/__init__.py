"""Key-value store adapters.

Stores handle:
- Redis: the production backend (redis-py)
- Memory: in-process backend with the same semantics (tests / local runs)

No voting or ranking logic in stores - that belongs in services.
"""

from article_votes.stores.base import KeyStore
from article_votes.stores.memory import MemoryKeyStore
from article_votes.stores.redis import RedisKeyStore, connect_redis

__all__ = [
    "KeyStore",
    "MemoryKeyStore",
    "RedisKeyStore",
    "connect_redis",
]
