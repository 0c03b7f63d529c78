"""Redis-backed key store.

Each KeyStore operation is exactly one Redis command:
- Hash records: HSET / HGETALL / HINCRBY
- Rankings: ZADD / ZINCRBY / ZSCORE / ZREVRANGE / ZINTERSTORE
- Voter and group sets: SMOVE / SADD / SREM / SCARD / SMEMBERS
- Keys: EXISTS / EXPIRE / TTL / INCR

SMOVE is the atomic move the vote engine relies on.
"""

from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
import logging

import redis

from article_votes.errors import StoreIOError
from article_votes.settings import Settings, get_settings

logger = logging.getLogger("article_votes")


def connect_redis(settings: Settings | None = None) -> redis.Redis:
    """Create a Redis client and validate connectivity.

    Args:
        settings: Settings to read ``redis_url`` from (defaults to cached settings).

    Returns:
        Connected client with ``decode_responses=True``.

    Raises:
        StoreIOError: If Redis cannot be reached.
    """
    settings = settings or get_settings()
    client = redis.Redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=settings.redis_timeout_seconds,
        socket_timeout=settings.redis_timeout_seconds,
    )
    with _store_errors("PING"):
        client.ping()
    logger.info("Redis connected")
    return client


@contextmanager
def _store_errors(command: str) -> Iterator[None]:
    try:
        yield
    except redis.RedisError as e:
        logger.error(f"Redis {command} failed: {e}")
        raise StoreIOError(f"Redis {command} failed: {e}") from e


class RedisKeyStore:
    """KeyStore over a redis-py client.

    The client must be created with ``decode_responses=True``.
    """

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    @property
    def client(self) -> redis.Redis:
        return self._client

    # ============================================================
    # Hash records
    # ============================================================

    def write_record(self, key: str, fields: Mapping[str, str | int | float]) -> None:
        with _store_errors("HSET"):
            self._client.hset(key, mapping=dict(fields))

    def read_record(self, key: str) -> dict[str, str]:
        with _store_errors("HGETALL"):
            return self._client.hgetall(key)

    def increment_field(self, key: str, field: str, delta: int) -> int:
        with _store_errors("HINCRBY"):
            return int(self._client.hincrby(key, field, delta))

    # ============================================================
    # Sorted sets
    # ============================================================

    def set_score(self, index: str, member: str, score: float) -> None:
        with _store_errors("ZADD"):
            self._client.zadd(index, {member: score})

    def increment_score(self, index: str, member: str, delta: float) -> float:
        with _store_errors("ZINCRBY"):
            return float(self._client.zincrby(index, delta, member))

    def read_score(self, index: str, member: str) -> float | None:
        with _store_errors("ZSCORE"):
            return self._client.zscore(index, member)

    def members_descending(self, index: str) -> list[str]:
        with _store_errors("ZREVRANGE"):
            return list(self._client.zrevrange(index, 0, -1))

    # ============================================================
    # Sets
    # ============================================================

    def move(self, source: str, dest: str, member: str) -> bool:
        with _store_errors("SMOVE"):
            return bool(self._client.smove(source, dest, member))

    def add(self, key: str, member: str) -> bool:
        with _store_errors("SADD"):
            return bool(self._client.sadd(key, member))

    def remove(self, key: str, member: str) -> bool:
        with _store_errors("SREM"):
            return bool(self._client.srem(key, member))

    def cardinality(self, key: str) -> int:
        with _store_errors("SCARD"):
            return int(self._client.scard(key))

    def members(self, key: str) -> set[str]:
        with _store_errors("SMEMBERS"):
            return set(self._client.smembers(key))

    # ============================================================
    # Keys
    # ============================================================

    def exists(self, key: str) -> bool:
        with _store_errors("EXISTS"):
            return bool(self._client.exists(key))

    def expire(self, key: str, seconds: int) -> None:
        with _store_errors("EXPIRE"):
            self._client.expire(key, seconds)

    def ttl(self, key: str) -> float | None:
        """Seconds until ``key`` expires, or None when it is missing or has no expiry."""
        with _store_errors("TTL"):
            remaining = self._client.ttl(key)
        # TTL answers -2 for a missing key and -1 for a key without expiry.
        return None if remaining is None or remaining < 0 else float(remaining)

    def increment(self, key: str) -> int:
        with _store_errors("INCR"):
            return int(self._client.incr(key))

    # ============================================================
    # Aggregation
    # ============================================================

    def intersect_into(self, dest: str, sources: Sequence[str], aggregate: str = "MAX") -> int:
        with _store_errors("ZINTERSTORE"):
            return int(self._client.zinterstore(dest, list(sources), aggregate=aggregate.upper()))
