"""Error taxonomy for draft sessions."""

from typing import Optional


class CounterpickError(Exception):
    """Base class for draft assistant errors."""


class InvalidActionError(CounterpickError):
    """A ban/pick was attempted out of turn, on an unavailable champion, or after completion.

    The draft state is left exactly as it was before the attempt.
    """

    def __init__(self, message: str, champion_id: Optional[str] = None):
        super().__init__(message)
        self.champion_id = champion_id


class SequenceDesyncFault(CounterpickError):
    """Slot bookkeeping no longer matches the draft sequence.

    Raised when a step says a team should act but that team's target
    array has no empty slot (or an undo cannot find the slot it should
    clear). The owning session must be reset before it is used again.
    """

    def __init__(self, message: str, step_index: Optional[int] = None):
        super().__init__(message)
        self.step_index = step_index


class SessionNotFoundError(CounterpickError):
    """No live draft session has the requested id."""


class SessionInvalidatedError(CounterpickError):
    """The session hit a SequenceDesyncFault and needs a reset."""


class DraftIncompleteError(CounterpickError):
    """The operation needs a completed draft."""


class DegradedRecommendationWarning(UserWarning):
    """Reference data for a scoring factor was missing or partial.

    Collected on recommendation results rather than raised: the factor
    contributes zero and the rest of the computation proceeds.
    """

    def __init__(self, factor: str, message: str):
        super().__init__(message)
        self.factor = factor
        self.message = message

    def to_dict(self) -> dict:
        return {"factor": self.factor, "message": self.message}
