"""In-process key store with Redis semantics.

Mirrors the behaviour the services depend on:
- empty sets/sorted sets/hashes disappear, so ``exists`` turns False
- SMOVE removes from the source even when the destination already has the member
- plain sets join intersections with an implicit score of 1
- expiry is checked against the injected clock on every access, and every
  EXPIRE or ZINTERSTORE also sweeps all keys already past their deadline

Used for tests and single-process runs; all state lives on the instance.
"""

from collections.abc import Callable, Mapping, Sequence
import threading
import time
from typing import Any

from article_votes.errors import StoreIOError

_AGGREGATES: dict[str, Callable[[float, float], float]] = {
    "MAX": max,
    "MIN": min,
    "SUM": lambda a, b: a + b,
}


class MemoryKeyStore:
    """KeyStore held in a dict, safe for concurrent callers in one process."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._data: dict[str, Any] = {}
        self._deadlines: dict[str, float] = {}
        self._lock = threading.RLock()

    # ============================================================
    # Internals
    # ============================================================

    def _purge(self, key: str) -> None:
        deadline = self._deadlines.get(key)
        if deadline is not None and self._clock() >= deadline:
            self._data.pop(key, None)
            self._deadlines.pop(key, None)

    def _sweep(self) -> None:
        """Drop every key whose deadline has passed."""
        now = self._clock()
        for key in [k for k, deadline in self._deadlines.items() if now >= deadline]:
            self._data.pop(key, None)
            self._deadlines.pop(key, None)

    def _get(self, key: str, kind: type) -> Any:
        self._purge(key)
        value = self._data.get(key)
        if value is not None and not isinstance(value, kind):
            raise StoreIOError(
                f"WRONGTYPE operation against key {key!r} holding {type(value).__name__}"
            )
        return value

    def _get_or_create(self, key: str, kind: type) -> Any:
        value = self._get(key, kind)
        if value is None:
            value = kind()
            self._data[key] = value
        return value

    def _drop_if_empty(self, key: str) -> None:
        if not self._data.get(key):
            self._data.pop(key, None)
            self._deadlines.pop(key, None)

    def _as_zset(self, key: str) -> dict[str, float]:
        self._purge(key)
        value = self._data.get(key)
        if value is None:
            return {}
        if isinstance(value, set):
            return {member: 1.0 for member in value}
        if isinstance(value, _ZSet):
            return dict(value)
        raise StoreIOError(f"WRONGTYPE operation against key {key!r}")

    # ============================================================
    # Hash records
    # ============================================================

    def write_record(self, key: str, fields: Mapping[str, str | int | float]) -> None:
        with self._lock:
            record = self._get_or_create(key, _Hash)
            record.update({k: str(v) for k, v in fields.items()})
            self._drop_if_empty(key)

    def read_record(self, key: str) -> dict[str, str]:
        with self._lock:
            return dict(self._get(key, _Hash) or {})

    def increment_field(self, key: str, field: str, delta: int) -> int:
        with self._lock:
            record = self._get_or_create(key, _Hash)
            try:
                value = int(record.get(field, "0")) + delta
            except ValueError as e:
                raise StoreIOError(f"hash value at {key!r}.{field} is not an integer") from e
            record[field] = str(value)
            return value

    # ============================================================
    # Sorted sets
    # ============================================================

    def set_score(self, index: str, member: str, score: float) -> None:
        with self._lock:
            self._get_or_create(index, _ZSet)[member] = float(score)

    def increment_score(self, index: str, member: str, delta: float) -> float:
        with self._lock:
            zset = self._get_or_create(index, _ZSet)
            zset[member] = zset.get(member, 0.0) + delta
            return zset[member]

    def read_score(self, index: str, member: str) -> float | None:
        with self._lock:
            zset = self._get(index, _ZSet)
            return None if zset is None else zset.get(member)

    def members_descending(self, index: str) -> list[str]:
        with self._lock:
            zset = self._get(index, _ZSet) or {}
            # Redis ZREVRANGE breaks score ties by reverse lexicographic order.
            return [m for m, _ in sorted(zset.items(), key=lambda kv: (kv[1], kv[0]), reverse=True)]

    # ============================================================
    # Sets
    # ============================================================

    def move(self, source: str, dest: str, member: str) -> bool:
        with self._lock:
            src = self._get(source, set)
            self._get(dest, set)
            if not src or member not in src:
                return False
            src.discard(member)
            self._drop_if_empty(source)
            self._get_or_create(dest, set).add(member)
            return True

    def add(self, key: str, member: str) -> bool:
        with self._lock:
            members = self._get_or_create(key, set)
            if member in members:
                return False
            members.add(member)
            return True

    def remove(self, key: str, member: str) -> bool:
        with self._lock:
            members = self._get(key, set)
            if not members or member not in members:
                return False
            members.discard(member)
            self._drop_if_empty(key)
            return True

    def cardinality(self, key: str) -> int:
        with self._lock:
            return len(self._get(key, set) or ())

    def members(self, key: str) -> set[str]:
        with self._lock:
            return set(self._get(key, set) or ())

    # ============================================================
    # Keys
    # ============================================================

    def exists(self, key: str) -> bool:
        with self._lock:
            self._purge(key)
            return key in self._data

    def expire(self, key: str, seconds: int) -> None:
        with self._lock:
            self._sweep()
            if self.exists(key):
                self._deadlines[key] = self._clock() + seconds

    def ttl(self, key: str) -> float | None:
        """Seconds until ``key`` expires, or None when it has no expiry."""
        with self._lock:
            if not self.exists(key) or key not in self._deadlines:
                return None
            return self._deadlines[key] - self._clock()

    def increment(self, key: str) -> int:
        with self._lock:
            counter = self._get(key, _Counter)
            value = (counter.value if counter else 0) + 1
            self._data[key] = _Counter(value)
            return value

    # ============================================================
    # Aggregation
    # ============================================================

    def intersect_into(self, dest: str, sources: Sequence[str], aggregate: str = "MAX") -> int:
        combine = _AGGREGATES.get(aggregate.upper())
        if combine is None:
            raise StoreIOError(f"Unsupported aggregate: {aggregate}")
        with self._lock:
            self._sweep()
            inputs = [self._as_zset(key) for key in sources]
            result: dict[str, float] = dict(inputs[0]) if inputs else {}
            for other in inputs[1:]:
                result = {m: combine(s, other[m]) for m, s in result.items() if m in other}
            # Overwrites dest, clearing any expiry.
            self._data.pop(dest, None)
            self._deadlines.pop(dest, None)
            if result:
                self._data[dest] = _ZSet(result)
            return len(result)


class _Hash(dict):
    pass


class _ZSet(dict):
    pass


class _Counter:
    __slots__ = ("value",)

    def __init__(self, value: int) -> None:
        self.value = value
