"""Ranking service.

Rankings are sorted sets read in descending score order:
- "score" (default): running vote score
- "time": creation time, newest first
- "<base><group>": derived group ranking

Group rankings:
1. Derived key = "<base><group>", "score:<group>" when no base is given
   (e.g. "score:redis")
2. If the key is missing (never built or expired), ZINTERSTORE the group set
   with the base index, AGGREGATE MAX, and EXPIRE it
3. Read it like any other ranking

Recomputation is idempotent, so concurrent readers rebuilding the same key
need no locking; staleness is bounded by the TTL.
"""

import logging

from article_votes.errors import VotingError
from article_votes.keys import article_id_from_key, base_index, derived_ranking_key, group_key
from article_votes.schemas import Article
from article_votes.services.articles import get_article
from article_votes.settings import get_settings
from article_votes.stores.base import KeyStore

logger = logging.getLogger("article_votes")


def list_articles(store: KeyStore, ranking_key: str | None = None) -> list[Article]:
    """List articles ordered by descending score in a ranking.

    Args:
        store: Key store handle.
        ranking_key: Sorted set to read (defaults to the global score ranking).

    Returns:
        Hydrated articles, highest score first. Empty if the ranking is empty.

    Raises:
        VotingError: On the first key that fails to parse or hydrate. The
            articles hydrated before it are attached as ``partial``.
    """
    ranking_key = ranking_key or get_settings().default_ranking
    articles: list[Article] = []
    for key in store.members_descending(ranking_key):
        try:
            articles.append(get_article(store, article_id_from_key(key)))
        except VotingError as e:
            logger.warning(
                f"Ranking {ranking_key!r} stopped at {key!r} after {len(articles)} articles: {e}"
            )
            e.partial = articles
            raise
    return articles


def list_group_articles(
    store: KeyStore,
    group_id: str,
    base_ranking_key: str | None = None,
) -> list[Article]:
    """List a group's articles ordered by a base ranking.

    Args:
        store: Key store handle.
        group_id: Group identifier.
        base_ranking_key: Ranking to intersect with (defaults to "score").
            It prefixes the cache key as-is; a trailing ":" is dropped when
            naming the index, so "score:" and "score" both read "score".

    Returns:
        Hydrated articles in the group, highest score first.
    """
    settings = get_settings()
    base = base_index(base_ranking_key or settings.default_ranking)
    key = derived_ranking_key(group_id, base_ranking_key)

    if store.exists(key):
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Reusing cached ranking {key!r}, expires in {store.ttl(key)}s")
    else:
        count = store.intersect_into(key, [group_key(group_id), base], aggregate="MAX")
        store.expire(key, settings.derived_ranking_ttl_seconds)
        logger.info(
            f"Built ranking {key!r}: {count} articles, ttl={settings.derived_ranking_ttl_seconds}s"
        )

    return list_articles(store, key)
