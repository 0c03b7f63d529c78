"""Key-naming contract shared with existing store contents.

Key layout:
- article:<id>       hash   article record (id, title, slug, votes)
- score              zset   global score ranking
- time               zset   creation timestamps
- voated:<id>        set    up-voters (historical spelling, kept on disk)
- down-vote:<id>     set    down-voters
- group:<group>      set    article keys in a group
- score:<group>      zset   cached group ranking (expiring), or <base><group>
- article:           string id counter
"""

from article_votes.errors import InvalidKey

SEP = ":"

SCORE_INDEX = "score"
TIME_INDEX = "time"
VOTES_FIELD = "votes"

PREFIX_ARTICLE = "article:"
PREFIX_UPVOTED = "voated:"
PREFIX_DOWNVOTED = "down-vote:"
PREFIX_USER = "user:"
PREFIX_GROUP = "group:"

ARTICLE_ID_COUNTER = PREFIX_ARTICLE


def article_key(article_id: int) -> str:
    return f"{PREFIX_ARTICLE}{article_id}"


def user_key(user_id: int) -> str:
    return f"{PREFIX_USER}{user_id}"


def upvoted_key(article_id: int) -> str:
    return f"{PREFIX_UPVOTED}{article_id}"


def downvoted_key(article_id: int) -> str:
    return f"{PREFIX_DOWNVOTED}{article_id}"


def group_key(group_id: str) -> str:
    return f"{PREFIX_GROUP}{group_id}"


DEFAULT_DERIVED_PREFIX = f"{SCORE_INDEX}{SEP}"


def base_index(ranking_key: str) -> str:
    """Index name for a ranking key; ``"score:"`` and ``"score"`` are the same index."""
    return ranking_key.rstrip(SEP) or SCORE_INDEX


def derived_ranking_key(group_id: str, base_ranking_key: str | None = None) -> str:
    """Key of the cached group ranking.

    Format: {base}{group}, e.g. "score:redis" by default, "timeredis" for base "time".
    """
    return f"{base_ranking_key or DEFAULT_DERIVED_PREFIX}{group_id}"


def article_id_from_key(key: str) -> int:
    """Parse ``article:<id>`` back into an integer id.

    Raises:
        InvalidKey: If the key has no separator or the id is not an integer.
    """
    _, sep, raw_id = key.partition(SEP)
    if not sep:
        raise InvalidKey(f"Invalid key format: {key!r}")
    try:
        return int(raw_id)
    except ValueError as e:
        raise InvalidKey(f"Invalid article id in key: {key!r}") from e


def user_id_from_key(key: str) -> int:
    """Parse ``user:<id>`` back into an integer id."""
    _, sep, raw_id = key.partition(SEP)
    if not sep:
        raise InvalidKey(f"Invalid key format: {key!r}")
    try:
        return int(raw_id)
    except ValueError as e:
        raise InvalidKey(f"Invalid user id in key: {key!r}") from e
