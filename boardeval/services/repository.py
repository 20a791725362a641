"""Repository layer: database rows in, typed engine records out."""

from ..extensions import db
from ..errors import CandidateNotFound, CohortNotFound
from ..models import Candidate, CharacterTrait, Cohort, Question, Rating, RatingScore
from ..scoring import (
    CandidateRecord,
    CohortSnapshot,
    ItemKey,
    ItemKind,
    ItemRecord,
    Phase,
    RatingRecord,
    ScoreRecord,
)


def get_cohort(cohort_id) -> Cohort:
    cohort = db.session.get(Cohort, cohort_id)
    if cohort is None:
        raise CohortNotFound(cohort_id)
    return cohort


def get_candidate(candidate_id, cohort_id=None) -> Candidate:
    q = Candidate.query.filter_by(id=candidate_id)
    if cohort_id is not None:
        q = q.filter_by(cohort_id=cohort_id)
    c = q.first()
    if c is None:
        raise CandidateNotFound(candidate_id, cohort_id)
    return c


def candidate_record(c: Candidate) -> CandidateRecord:
    return CandidateRecord(
        id=c.id,
        is_active=bool(c.is_active),
        display_order=c.custom_order,
        candidate_number=c.candidate_number,
        first_name=c.first_name or "",
        last_name=c.last_name or "",
        email=c.email,
    )


def item_records(cohort_id):
    items = []
    for q in Question.query.filter_by(cohort_id=cohort_id).all():
        items.append(ItemRecord(
            key=ItemKey(ItemKind.QUESTION, q.id),
            label=q.question_text,
            phase=Phase(q.category),
            order=q.question_order or 0,
        ))
    for t in CharacterTrait.query.filter_by(cohort_id=cohort_id).all():
        items.append(ItemRecord(
            key=ItemKey(ItemKind.TRAIT, t.id),
            label=t.trait_name,
            phase=Phase.CHARACTER,
            order=t.trait_order or 0,
        ))
    return tuple(items)


def load_snapshot(cohort_id, include_inactive=False) -> CohortSnapshot:
    """Read everything aggregation needs for one cohort.

    Inactive candidates are left out unless asked for (the per-candidate
    breakdown still shows a deactivated candidate's history).
    """
    get_cohort(cohort_id)

    cand_q = Candidate.query.filter_by(cohort_id=cohort_id)
    if not include_inactive:
        cand_q = cand_q.filter(Candidate.is_active.is_(True))
    candidates = tuple(candidate_record(c) for c in cand_q.all())

    rating_rows = Rating.query.filter_by(cohort_id=cohort_id).all()
    ratings = tuple(
        RatingRecord(id=r.id, candidate_id=r.candidate_id, rater=r.rater, phase=r.phase)
        for r in rating_rows
    )

    score_rows = (
        RatingScore.query
        .join(Rating, Rating.id == RatingScore.rating_id)
        .filter(Rating.cohort_id == cohort_id)
        .order_by(RatingScore.rating_id, RatingScore.id)
        .all()
    )
    scores = tuple(
        ScoreRecord(rating_id=s.rating_id, item=s.item, value=float(s.score), comment=s.comment)
        for s in score_rows
    )

    return CohortSnapshot(
        cohort_id=cohort_id,
        candidates=candidates,
        ratings=ratings,
        scores=scores,
        items=item_records(cohort_id),
    )
