import pytest

from article_votes.errors import NotFound, TooOld
from article_votes.schemas import Article, Vote, VoteState
from article_votes.services.articles import create_article, get_article
from article_votes.services.voting import get_score, get_vote_state, get_voters, vote_for

from tests.conftest import DAY


def test_upvote_once(store, clock, article):
    score = vote_for(store, article.id, 1, Vote.UPVOTE, now=clock())

    assert score == 1
    assert get_score(store, article.id) == 1
    assert get_article(store, article.id).votes == 1
    assert get_voters(store, article.id, Vote.UPVOTE) == {1}
    assert get_voters(store, article.id, Vote.DOWNVOTE) == set()
    assert store.cardinality("voated:12345") == 1


def test_downvote_once(store, clock, article):
    score = vote_for(store, article.id, 1, Vote.DOWNVOTE, now=clock())

    assert score == -1
    assert get_article(store, article.id).votes == -1
    assert store.cardinality("down-vote:12345") == 1
    assert get_vote_state(store, article.id, 1) is VoteState.DOWNVOTED


def test_switching_direction_moves_voter_and_applies_one_delta(store, clock, article):
    vote_for(store, article.id, 1, Vote.UPVOTE, now=clock())
    score = vote_for(store, article.id, 1, Vote.DOWNVOTE, now=clock())

    assert score == 0
    assert get_voters(store, article.id, Vote.UPVOTE) == set()
    assert get_voters(store, article.id, Vote.DOWNVOTE) == {1}
    assert get_vote_state(store, article.id, 1) is VoteState.DOWNVOTED


def test_switch_uses_move_not_add(store, clock, article, monkeypatch):
    vote_for(store, article.id, 1, Vote.UPVOTE, now=clock())

    adds = []
    original_add = store.add

    def spy_add(key, member):
        adds.append((key, member))
        return original_add(key, member)

    monkeypatch.setattr(store, "add", spy_add)
    vote_for(store, article.id, 1, Vote.DOWNVOTE, now=clock())

    assert adds == []


def test_repeated_same_direction_vote_keeps_counting(store, clock, article):
    vote_for(store, article.id, 1, Vote.UPVOTE, now=clock())
    score = vote_for(store, article.id, 1, Vote.UPVOTE, now=clock())

    assert score == 2
    assert get_article(store, article.id).votes == 2
    # Membership stays a single entry.
    assert store.cardinality("voated:12345") == 1


def test_score_may_go_negative(store, clock, article):
    for user_id in (1, 2, 3):
        vote_for(store, article.id, user_id, Vote.DOWNVOTE, now=clock())

    assert get_score(store, article.id) == -3


def test_vote_accepts_plain_string_direction(store, clock, article):
    vote_for(store, article.id, 5, "UPVOTE", now=clock())
    assert get_vote_state(store, article.id, 5) is VoteState.UPVOTED


def test_unvoted_state(store, article):
    assert get_vote_state(store, article.id, 77) is VoteState.UNVOTED


def test_vote_on_old_article_is_rejected_without_mutation(store, clock, article):
    vote_for(store, article.id, 1, Vote.UPVOTE, now=clock())
    clock.advance(8 * DAY)

    with pytest.raises(TooOld):
        vote_for(store, article.id, 2, Vote.UPVOTE, now=clock())
    with pytest.raises(TooOld):
        vote_for(store, article.id, 1, Vote.DOWNVOTE, now=clock())

    assert get_score(store, article.id) == 1
    assert get_article(store, article.id).votes == 1
    assert get_voters(store, article.id, Vote.UPVOTE) == {1}
    assert get_voters(store, article.id, Vote.DOWNVOTE) == set()


def test_vote_at_window_edge_is_accepted(store, clock, article):
    clock.advance(7 * DAY)
    assert vote_for(store, article.id, 1, Vote.UPVOTE, now=clock()) == 1

    clock.advance(1)
    with pytest.raises(TooOld):
        vote_for(store, article.id, 2, Vote.UPVOTE, now=clock())


def test_vote_window_is_configurable(store, clock, article, monkeypatch):
    monkeypatch.setenv("VOTE_WINDOW_SECONDS", "60")
    clock.advance(61)

    with pytest.raises(TooOld):
        vote_for(store, article.id, 1, Vote.UPVOTE, now=clock())


def test_vote_on_unknown_article_raises_not_found(store, clock):
    with pytest.raises(NotFound):
        vote_for(store, 404, 1, Vote.UPVOTE, now=clock())


def test_get_score_of_unknown_article_raises_not_found(store):
    with pytest.raises(NotFound):
        get_score(store, 404)


def test_end_to_end_scenario(store, clock):
    create_article(store, Article(id=1, title="T", slug="t"), now=clock())

    vote_for(store, 1, 1, Vote.UPVOTE, now=clock())
    vote_for(store, 1, 2, Vote.UPVOTE, now=clock())
    assert get_score(store, 1) == 2
    assert get_article(store, 1).votes == 2
    assert get_voters(store, 1, Vote.UPVOTE) == {1, 2}

    vote_for(store, 1, 1, Vote.DOWNVOTE, now=clock())
    assert get_score(store, 1) == 1
    assert get_voters(store, 1, Vote.UPVOTE) == {2}
    assert get_voters(store, 1, Vote.DOWNVOTE) == {1}
