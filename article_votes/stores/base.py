"""The narrow store contract the services call through."""

from collections.abc import Mapping, Sequence
from typing import Protocol


class KeyStore(Protocol):
    """Hash records, sorted sets, sets and expiring keys.

    Implementations raise ``StoreIOError`` when the backend fails.
    """

    # Hash records
    def write_record(self, key: str, fields: Mapping[str, str | int | float]) -> None: ...

    def read_record(self, key: str) -> dict[str, str]: ...

    def increment_field(self, key: str, field: str, delta: int) -> int: ...

    # Sorted sets
    def set_score(self, index: str, member: str, score: float) -> None: ...

    def increment_score(self, index: str, member: str, delta: float) -> float: ...

    def read_score(self, index: str, member: str) -> float | None: ...

    def members_descending(self, index: str) -> list[str]: ...

    # Sets
    def move(self, source: str, dest: str, member: str) -> bool: ...

    def add(self, key: str, member: str) -> bool: ...

    def remove(self, key: str, member: str) -> bool: ...

    def cardinality(self, key: str) -> int: ...

    def members(self, key: str) -> set[str]: ...

    # Keys
    def exists(self, key: str) -> bool: ...

    def expire(self, key: str, seconds: int) -> None: ...

    def ttl(self, key: str) -> float | None: ...

    def increment(self, key: str) -> int: ...

    # Aggregation
    def intersect_into(self, dest: str, sources: Sequence[str], aggregate: str = "MAX") -> int: ...
