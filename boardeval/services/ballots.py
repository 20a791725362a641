"""Rating Store: the write path for ballots.

A ballot is one rater's complete score set for one (candidate, phase).
Submitting again replaces the stored set, it never adds to it; an empty
set is a valid abstain that still records the ballot.
"""

import math
from dataclasses import dataclass
from typing import Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..errors import InvalidBallot, ItemNotFound, Unauthorized
from ..models import CharacterTrait, Question, Rating, RatingScore
from ..scoring import ItemKind, Phase
from .locks import ballot_lock, ballot_lock_key
from .repository import get_candidate, get_cohort


@dataclass(frozen=True)
class BallotItem:
    item_id: int
    score: float
    comment: Optional[str] = None

    @classmethod
    def from_dict(cls, raw):
        if not isinstance(raw, dict):
            raise InvalidBallot("Each ballot item must be an object")
        item_id = raw.get("item_id", raw.get("id"))
        # int() would quietly turn True into 1 and 1.9 into 1
        if isinstance(item_id, bool) or (isinstance(item_id, float) and not item_id.is_integer()):
            raise InvalidBallot(f"Invalid item id {item_id!r}")
        try:
            item_id = int(item_id)
        except (TypeError, ValueError):
            raise InvalidBallot(f"Invalid item id {item_id!r}") from None
        score = raw.get("score")
        if isinstance(score, bool):
            raise InvalidBallot(f"Invalid score for item {item_id}")
        try:
            score = float(score)
        except (TypeError, ValueError):
            raise InvalidBallot(f"Invalid score for item {item_id}") from None
        comment = raw.get("comment") or None
        if comment is not None:
            comment = str(comment).strip() or None
        return cls(item_id=item_id, score=score, comment=comment)


@dataclass(frozen=True)
class BallotResult:
    rating_id: int
    created: bool
    score_count: int

    def to_dict(self):
        return {"success": True, "rating_id": self.rating_id, "created": self.created, "score_count": self.score_count}


def _validate_items(cohort_id, phase: Phase, items):
    """Check every item before anything is written."""
    seen = set()
    for it in items:
        if not math.isfinite(it.score):
            raise InvalidBallot(f"Score for item {it.item_id} is not a finite number")
        if it.item_id in seen:
            raise InvalidBallot(f"Item {it.item_id} appears more than once")
        seen.add(it.item_id)

    if not seen:
        return

    if phase.item_kind is ItemKind.TRAIT:
        rows = CharacterTrait.query.filter(CharacterTrait.cohort_id == cohort_id, CharacterTrait.id.in_(seen)).all()
        found = {t.id for t in rows}
    else:
        rows = Question.query.filter(
            Question.cohort_id == cohort_id,
            Question.category == phase.value,
            Question.id.in_(seen),
        ).all()
        found = {q.id for q in rows}
        unscorable = sorted(q.id for q in rows if not q.is_scorable)
        if unscorable:
            raise InvalidBallot(f"Question {unscorable[0]} is not scorable")

    missing = sorted(seen - found)
    if missing:
        raise ItemNotFound(missing[0], phase.item_kind.value, phase.value)


def _find_rating(candidate_id, rater, cohort_id, phase):
    return Rating.query.filter_by(
        candidate_id=candidate_id,
        cohort_id=cohort_id,
        rating_type=phase.value,
        **Rating.rater_columns(rater),
    ).first()


def _get_or_create_rating(candidate_id, rater, cohort_id, phase):
    rating = _find_rating(candidate_id, rater, cohort_id, phase)
    if rating is not None:
        rating.updated_at = db.func.now()
        return rating, False

    rating = Rating(candidate_id=candidate_id, cohort_id=cohort_id, rating_type=phase.value,
                    **Rating.rater_columns(rater))
    db.session.add(rating)
    try:
        db.session.flush()
    except IntegrityError:
        # another worker inserted the same ballot first; nothing else is pending yet
        db.session.rollback()
        rating = _find_rating(candidate_id, rater, cohort_id, phase)
        if rating is None:
            raise
        rating.updated_at = db.func.now()
        return rating, False
    return rating, True


def submit_ballot(candidate_id, cohort_id, phase, rater, items) -> BallotResult:
    """Create or replace `rater`'s ballot for a candidate and phase.

    `items` is a sequence of BallotItem (or dicts with item_id/score/comment).
    Nothing is written unless the whole ballot is valid.
    """
    if rater is None:
        raise Unauthorized("A rater identity is required to submit scores")
    phase = Phase.parse(phase)
    items = [it if isinstance(it, BallotItem) else BallotItem.from_dict(it) for it in (items or [])]

    get_cohort(cohort_id)
    get_candidate(candidate_id, cohort_id)
    _validate_items(cohort_id, phase, items)

    key = ballot_lock_key(candidate_id, rater, cohort_id, phase)
    with ballot_lock(key):
        try:
            rating, created = _get_or_create_rating(candidate_id, rater, cohort_id, phase)
            db.session.flush()

            kind = phase.item_kind
            RatingScore.query.filter(
                RatingScore.rating_id == rating.id,
                RatingScore.kind_filter(kind),
            ).delete(synchronize_session=False)
            db.session.flush()

            for it in items:
                row = RatingScore(rating_id=rating.id, score=it.score, comment=it.comment)
                if kind is ItemKind.TRAIT:
                    row.trait_id = it.item_id
                else:
                    row.question_id = it.item_id
                db.session.add(row)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    current_app.logger.info(
        "ballot %s: cohort=%s candidate=%s phase=%s rater=%s items=%d%s",
        "created" if created else "replaced", cohort_id, candidate_id, phase.value,
        rater.label, len(items), " (abstain)" if not items else "",
    )
    return BallotResult(rating_id=rating.id, created=created, score_count=len(items))


def get_ballot(candidate_id, cohort_id, phase, rater):
    """The rater's stored ballot as a dict, or None if never submitted."""
    if rater is None:
        raise Unauthorized("A rater identity is required")
    phase = Phase.parse(phase)
    rating = _find_rating(candidate_id, rater, cohort_id, phase)
    if rating is None:
        return None
    scores = RatingScore.query.filter(
        RatingScore.rating_id == rating.id,
        RatingScore.kind_filter(phase.item_kind),
    ).order_by(RatingScore.id).all()
    return {
        "rating_id": rating.id,
        "candidate_id": candidate_id,
        "cohort_id": cohort_id,
        "phase": phase.value,
        "abstain": not scores,
        "items": [
            {"item_id": s.item.item_id, "score": s.score, "comment": s.comment}
            for s in scores
        ],
    }
