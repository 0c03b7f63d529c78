"""Group index: which articles belong to which groups.

Adds and removes are applied one at a time with no rollback. If one fails,
the earlier ones stay applied and the error propagates.
"""

from collections.abc import Iterable
import logging

from article_votes.keys import article_id_from_key, article_key, group_key
from article_votes.stores.base import KeyStore

logger = logging.getLogger("article_votes")


def update_groups(
    store: KeyStore,
    article_id: int,
    to_add: Iterable[str] = (),
    to_remove: Iterable[str] = (),
) -> None:
    """Add an article to some groups and remove it from others.

    Adding to a group it is already in, or removing it from a group it is
    not in, is a no-op.

    Args:
        store: Key store handle.
        article_id: Article identifier.
        to_add: Groups to add the article to.
        to_remove: Groups to remove the article from.
    """
    article = article_key(article_id)
    for group in to_add:
        if store.add(group_key(group), article):
            logger.debug(f"{article} added to group {group!r}")
    for group in to_remove:
        if store.remove(group_key(group), article):
            logger.debug(f"{article} removed from group {group!r}")


def get_group_article_ids(store: KeyStore, group_id: str) -> set[int]:
    """Article ids currently in a group."""
    return {article_id_from_key(member) for member in store.members(group_key(group_id))}
