"""Article repository.

Creating an article is three independent writes:
1. HSET the article record
2. ZADD the article to the score index at 0
3. ZADD the article to the time index at "now"

They are not wrapped in a transaction; a failure between steps leaves the
earlier writes in place and surfaces the error to the caller.
"""

import logging
import time

from pydantic import ValidationError

from article_votes.errors import NotFound
from article_votes.keys import ARTICLE_ID_COUNTER, SCORE_INDEX, TIME_INDEX, article_key
from article_votes.schemas import Article
from article_votes.stores.base import KeyStore

logger = logging.getLogger("article_votes")

# A hash without these (e.g. only "votes" left by HINCRBY) counts as absent.
REQUIRED_FIELDS = ("id", "title", "slug")


def create_article(store: KeyStore, article: Article, *, now: float | None = None) -> None:
    """Persist an article and seed its score and creation time.

    The record write is an unconditional upsert: an existing article with
    the same id is overwritten, and its score reset to 0.

    Args:
        store: Key store handle.
        article: Article to persist.
        now: Creation time as Unix seconds (defaults to the current time).
    """
    key = article_key(article.id)
    created_at = int(time.time() if now is None else now)

    store.write_record(key, article.to_record())
    store.set_score(SCORE_INDEX, key, 0)
    store.set_score(TIME_INDEX, key, created_at)

    logger.info(f"Article created: {key} slug={article.slug!r}")


def post_article(store: KeyStore, title: str, slug: str, *, now: float | None = None) -> Article:
    """Create an article with the next id from the store's id counter.

    Args:
        store: Key store handle.
        title: Article title.
        slug: Article slug.
        now: Creation time as Unix seconds (defaults to the current time).

    Returns:
        The created article.
    """
    article = Article(id=store.increment(ARTICLE_ID_COUNTER), title=title, slug=slug)
    create_article(store, article, now=now)
    return article


def get_article(store: KeyStore, article_id: int) -> Article:
    """Load an article record.

    Args:
        store: Key store handle.
        article_id: Article identifier.

    Returns:
        The article, including its current vote count.

    Raises:
        NotFound: If no record exists for ``article_id``, or the record is
            missing id/title/slug or holds values that do not parse.
    """
    fields = store.read_record(article_key(article_id))
    missing = [name for name in REQUIRED_FIELDS if name not in fields]
    if missing:
        if fields:
            logger.warning(f"Article {article_id} record is incomplete, missing {missing}")
        raise NotFound(f"Article {article_id} not found")
    try:
        return Article.model_validate(fields)
    except ValidationError as e:
        logger.warning(f"Article {article_id} record is malformed: {e.error_count()} errors")
        raise NotFound(f"Article {article_id} record is malformed") from e


def article_exists(store: KeyStore, article_id: int) -> bool:
    return store.exists(article_key(article_id))
