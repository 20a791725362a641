"""Exceptions raised by services and turned into JSON errors by the app.

Each carries the HTTP status it maps to so routes never translate by hand.
"""


class BoardEvalError(Exception):
    """Base exception for all board evaluation errors."""

    status_code = 400

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__doc__ or self.__class__.__name__)
        self.message = str(self.args[0])

    def to_dict(self):
        return {"error": self.__class__.__name__, "message": self.message}


class Unauthorized(BoardEvalError):
    """No rater identity for this request."""

    status_code = 401


class Forbidden(BoardEvalError):
    """Not allowed for this account."""

    status_code = 403


class NotFound(BoardEvalError):
    status_code = 404


class CohortNotFound(NotFound):
    def __init__(self, cohort_id):
        self.cohort_id = cohort_id
        super().__init__(f"Cohort {cohort_id} not found")


class CandidateNotFound(NotFound):
    def __init__(self, candidate_id, cohort_id=None):
        self.candidate_id = candidate_id
        self.cohort_id = cohort_id
        where = f" in cohort {cohort_id}" if cohort_id is not None else ""
        super().__init__(f"Candidate {candidate_id} not found{where}")


class ItemNotFound(NotFound):
    def __init__(self, item_id, kind, phase=None):
        self.item_id = item_id
        self.kind = kind
        msg = f"No {kind} {item_id}"
        if phase is not None:
            msg += f" for the {phase} phase"
        super().__init__(msg)


class InvalidBallot(BoardEvalError):
    """Ballot payload is malformed."""


class InvalidSettings(BoardEvalError):
    """Cohort settings are out of range."""


class InvalidWeights(InvalidSettings):
    def __init__(self, total):
        self.total = total
        super().__init__(
            f"Weights must sum to exactly 1.00 (100%). Currently sums to {total:.2f}"
        )


class Conflict(BoardEvalError):
    status_code = 409


class VotingClosed(Conflict):
    """Voting for this phase is closed."""


class CohortExists(Conflict):
    """A cohort with this term and year already exists."""


class CohortInactive(Conflict):
    """Voting phases can only be toggled on the active cohort."""


class AlreadyBoardMember(Conflict):
    """This user already sits on the board for this cohort."""


class InvalidOrder(BoardEvalError):
    """Candidate order must list each candidate id once."""
