"""Error taxonomy for the voting engine.

All errors surface to the immediate caller. Nothing here retries or rolls
back a partially applied multi-step write.
"""

from typing import Any


class VotingError(RuntimeError):
    """Base class for engine errors.

    ``partial`` carries results gathered before the failure, for list
    operations that return what they managed to read.
    """

    def __init__(self, message: str, *, partial: list[Any] | None = None) -> None:
        super().__init__(message)
        self.partial = partial


class StoreIOError(VotingError):
    """An underlying store call failed."""


class NotFound(VotingError):
    """A record or index entry does not exist."""


class TooOld(VotingError):
    """A vote was cast outside the eligibility window."""


class InvalidKey(VotingError):
    """A store key could not be parsed back into an article id."""
