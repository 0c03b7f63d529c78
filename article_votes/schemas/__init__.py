"""Pydantic schemas for article records and votes."""

from article_votes.schemas.article import Article, Vote, VoteState

__all__ = [
    "Article",
    "Vote",
    "VoteState",
]
