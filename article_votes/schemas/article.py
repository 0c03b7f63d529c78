"""Schemas for articles and votes."""

from enum import Enum

from pydantic import BaseModel


class Vote(str, Enum):
    """Direction of a vote."""

    UPVOTE = "UPVOTE"
    DOWNVOTE = "DOWNVOTE"

    @property
    def delta(self) -> int:
        return 1 if self is Vote.UPVOTE else -1

    @property
    def opposite(self) -> "Vote":
        return Vote.DOWNVOTE if self is Vote.UPVOTE else Vote.UPVOTE


class VoteState(str, Enum):
    """Where a voter currently sits for one article."""

    UNVOTED = "UNVOTED"
    UPVOTED = "UPVOTED"
    DOWNVOTED = "DOWNVOTED"


class Article(BaseModel):
    """An article record as stored in the ``article:<id>`` hash."""

    id: int
    title: str
    slug: str
    votes: int = 0

    def to_record(self) -> dict[str, str | int]:
        """Flatten to hash fields."""
        return {"id": self.id, "title": self.title, "slug": self.slug, "votes": self.votes}
