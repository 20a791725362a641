"""Admin edits to a cohort's roster: candidate order and status, scorable questions, board seats."""

from flask import current_app

from ..extensions import db
from ..errors import AlreadyBoardMember, CandidateNotFound, Forbidden, InvalidOrder, ItemNotFound, NotFound
from ..models import BoardMembership, Candidate, Question, User
from .cohorts import _commit
from .repository import get_candidate, get_cohort


def reorder_candidates(cohort_id, ordered_ids):
    """Give the listed candidates display positions 1..n in list order.

    Every id is checked before anything changes. Candidates left out keep
    their current position.
    """
    get_cohort(cohort_id)
    ids = list(ordered_ids or [])
    if not all(isinstance(i, int) and not isinstance(i, bool) for i in ids) or len(set(ids)) != len(ids):
        raise InvalidOrder()

    rows = {c.id: c for c in Candidate.query.filter(Candidate.cohort_id == cohort_id, Candidate.id.in_(ids)).all()}
    missing = [i for i in ids if i not in rows]
    if missing:
        raise CandidateNotFound(missing[0], cohort_id)

    for position, candidate_id in enumerate(ids, start=1):
        rows[candidate_id].custom_order = position
    _commit()
    current_app.logger.info("cohort %s candidate order set for %d candidates", cohort_id, len(ids))
    return [rows[i] for i in ids]


def set_candidate_active(cohort_id, candidate_id, is_active) -> Candidate:
    candidate = get_candidate(candidate_id, cohort_id)
    candidate.is_active = bool(is_active)
    _commit()
    current_app.logger.info("candidate %s %s", candidate.id, "reactivated" if is_active else "deactivated")
    return candidate


def set_question_scorable(cohort_id, question_id, is_scorable) -> Question:
    question = Question.query.filter_by(id=question_id, cohort_id=cohort_id).first()
    if question is None:
        raise ItemNotFound(question_id, "question")
    question.is_scorable = bool(is_scorable)
    _commit()
    current_app.logger.info("question %s scorable=%s", question.id, question.is_scorable)
    return question


def add_board_member(cohort_id, user_id, position=None) -> BoardMembership:
    get_cohort(cohort_id)
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound(f"User {user_id} not found")
    if BoardMembership.query.filter_by(cohort_id=cohort_id, user_id=user.id).first() is not None:
        raise AlreadyBoardMember()
    seat = BoardMembership(cohort_id=cohort_id, user_id=user.id, position=(position or "").strip() or None)
    db.session.add(seat)
    _commit()
    current_app.logger.info("cohort %s board seat added for %s", cohort_id, user.email)
    return seat


def remove_board_member(cohort_id, user_id, actor):
    """Take a user off the cohort's board. Their past ballots stay."""
    if actor is not None and actor.id == user_id:
        raise Forbidden("Cannot remove yourself.")
    seat = BoardMembership.query.filter_by(cohort_id=cohort_id, user_id=user_id).first()
    if seat is None:
        raise NotFound(f"User {user_id} is not on the board for cohort {cohort_id}")
    db.session.delete(seat)
    _commit()
    current_app.logger.info("cohort %s board seat removed for user %s", cohort_id, user_id)
