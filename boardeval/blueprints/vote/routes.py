from flask import jsonify, request
from flask_login import login_required, current_user
from . import bp
from ...errors import CandidateNotFound, InvalidBallot, NotFound, VotingClosed
from ...models import Candidate, CharacterTrait, Question, Rating
from ...scoring import LiveUser, Phase, PHASES
from ...services.ballots import get_ballot, submit_ballot
from ...services.cohorts import active_cohort
from ...services.repository import get_candidate


def _parse_phase(phase):
    try:
        return Phase.parse(phase)
    except ValueError:
        raise NotFound(f"Unknown phase {phase!r}") from None


def _votable_candidate(candidate_id):
    c = get_candidate(candidate_id)
    # deactivated candidates are off the ballot even though their history stays
    if not c.is_active:
        raise CandidateNotFound(candidate_id)
    return c


def _rater():
    # Flask-Login guarantees an authenticated user here; AnonymousUserMixin has no id
    user_id = getattr(current_user, "id", None)
    return LiveUser(user_id) if user_id is not None else None


def _ballot_items(cohort_id, phase):
    if phase is Phase.CHARACTER:
        traits = CharacterTrait.query.filter_by(cohort_id=cohort_id).order_by(CharacterTrait.trait_order, CharacterTrait.id).all()
        return [{"item_id": t.id, "label": t.trait_name, "scorable": True} for t in traits]
    questions = (
        Question.query.filter_by(cohort_id=cohort_id, category=phase.value)
        .order_by(Question.question_order, Question.id)
        .all()
    )
    return [{"item_id": q.id, "label": q.question_text, "scorable": q.is_scorable} for q in questions]


@bp.get("")
@login_required
def hub():
    """Candidates of the active cohort with this rater's ballot status."""
    cohort = active_cohort()
    if cohort is None:
        return jsonify({"cohort": None, "candidates": []})

    candidates = (
        Candidate.query.filter_by(cohort_id=cohort.id, is_active=True)
        .order_by(Candidate.candidate_number, Candidate.id)
        .all()
    )
    mine = Rating.query.filter_by(cohort_id=cohort.id, voter_id=current_user.id).all()
    done = {(r.candidate_id, r.rating_type) for r in mine}
    return jsonify({
        "cohort": cohort.to_dict(),
        "candidates": [
            {
                "id": c.id,
                "candidate_number": c.candidate_number,
                "name": c.full_name,
                "rated": {p.value: (c.id, p.value) in done for p in PHASES},
            }
            for c in candidates
        ],
    })


@bp.get("/<int:candidate_id>/<phase>")
@login_required
def ballot(candidate_id, phase):
    phase = _parse_phase(phase)
    c = _votable_candidate(candidate_id)
    return jsonify({
        "candidate": {"id": c.id, "candidate_number": c.candidate_number, "name": c.full_name},
        "phase": phase.value,
        "voting_open": c.cohort.is_phase_open(phase),
        "items": _ballot_items(c.cohort_id, phase),
        "ballot": get_ballot(c.id, c.cohort_id, phase, _rater()),
    })


@bp.post("/<int:candidate_id>/<phase>")
@login_required
def submit(candidate_id, phase):
    phase = _parse_phase(phase)
    c = _votable_candidate(candidate_id)
    if not c.cohort.is_phase_open(phase):
        raise VotingClosed(f"{phase.value.capitalize()} voting is closed")

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict) or not isinstance(payload.get("items", []), list):
        raise InvalidBallot("Expected a JSON object with an 'items' list")

    result = submit_ballot(c.id, c.cohort_id, phase, _rater(), payload.get("items", []))
    return jsonify(result.to_dict()), 201 if result.created else 200
