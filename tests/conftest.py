"""Shared fixtures: a controllable clock and stores built on it."""

import fakeredis
import pytest

from article_votes.schemas import Article
from article_votes.services.articles import create_article
from article_votes.settings import get_settings
from article_votes.stores import MemoryKeyStore, RedisKeyStore

START = 1_700_000_000.0
DAY = 24 * 60 * 60


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: float = START) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> MemoryKeyStore:
    return MemoryKeyStore(clock=clock)


@pytest.fixture
def redis_client():
    client = fakeredis.FakeRedis(decode_responses=True)
    yield client
    client.flushall()


@pytest.fixture
def redis_store(redis_client) -> RedisKeyStore:
    return RedisKeyStore(redis_client)


@pytest.fixture
def article(store: MemoryKeyStore, clock: FakeClock) -> Article:
    """Article 12345 created "now" in the memory store."""
    a = Article(id=12345, title="Example Title", slug="example-slug")
    create_article(store, a, now=clock())
    return a
