"""Vote engine.

Per (article, voter) pair the state is one of UNVOTED / UPVOTED / DOWNVOTED,
held as membership in the article's up-vote set or down-vote set.

A vote call:
1. Reads the creation time and rejects votes older than the window (TooOld)
2. Move-or-add: SMOVE the voter from the opposite set into the target set;
   when nothing moved, SADD the voter to the target set
3. Adds +1/-1 to the record's vote count
4. Adds +1/-1 to the article's score

The state is never read first, so voting the same direction twice applies
the delta twice (membership stays a single entry). Callers that need one
vote per user must track it themselves.

Steps 2-4 are separate store calls with no transaction. The membership
invariant (a voter is in at most one set) rests on SMOVE being atomic; two
concurrent opposite votes by one user resolve as last committed wins.
"""

import logging
import time

from article_votes.errors import NotFound, TooOld
from article_votes.keys import (
    SCORE_INDEX,
    TIME_INDEX,
    VOTES_FIELD,
    article_key,
    downvoted_key,
    upvoted_key,
    user_id_from_key,
    user_key,
)
from article_votes.schemas import Vote, VoteState
from article_votes.settings import get_settings
from article_votes.stores.base import KeyStore

logger = logging.getLogger("article_votes")


def voters_key(article_id: int, vote: Vote) -> str:
    """Key of the voter set for one direction."""
    if vote is Vote.UPVOTE:
        return upvoted_key(article_id)
    return downvoted_key(article_id)


def vote_for(
    store: KeyStore,
    article_id: int,
    user_id: int,
    vote: Vote,
    *,
    now: float | None = None,
) -> int:
    """Cast a vote and update membership, vote count and score.

    Args:
        store: Key store handle.
        article_id: Article being voted on.
        user_id: Voter.
        vote: Direction of the vote.
        now: Current Unix time (defaults to the current time).

    Returns:
        The article's score after the vote.

    Raises:
        NotFound: If the article has no creation time.
        TooOld: If the article is older than the voting window. Nothing is
            written in that case.
    """
    vote = Vote(vote)
    now = time.time() if now is None else now
    article = article_key(article_id)

    created_at = store.read_score(TIME_INDEX, article)
    if created_at is None:
        raise NotFound(f"Article {article_id} has no creation time")

    window = get_settings().vote_window_seconds
    if now - created_at > window:
        logger.warning(
            f"Vote rejected: {article} created at {int(created_at)} is older than {window}s"
        )
        raise TooOld(f"Can't vote for article {article_id}: older than {window} seconds")

    voter = user_key(user_id)
    target = voters_key(article_id, vote)
    moved = store.move(voters_key(article_id, vote.opposite), target, voter)
    if not moved:
        store.add(target, voter)

    store.increment_field(article, VOTES_FIELD, vote.delta)
    score = store.increment_score(SCORE_INDEX, article, vote.delta)

    logger.debug(f"{voter} {vote.value} {article} (moved={moved}) -> score={score}")
    return int(score)


def get_vote_state(store: KeyStore, article_id: int, user_id: int) -> VoteState:
    """Where ``user_id`` currently sits for ``article_id``."""
    voter = user_key(user_id)
    if voter in store.members(upvoted_key(article_id)):
        return VoteState.UPVOTED
    if voter in store.members(downvoted_key(article_id)):
        return VoteState.DOWNVOTED
    return VoteState.UNVOTED


def get_voters(store: KeyStore, article_id: int, vote: Vote) -> set[int]:
    """User ids currently in the up- or down-vote set of an article."""
    return {user_id_from_key(member) for member in store.members(voters_key(article_id, Vote(vote)))}


def get_score(store: KeyStore, article_id: int) -> int:
    """Current score of an article.

    Raises:
        NotFound: If the article is not in the score index.
    """
    score = store.read_score(SCORE_INDEX, article_key(article_id))
    if score is None:
        raise NotFound(f"Article {article_id} has no score")
    return int(score)
