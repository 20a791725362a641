from flask import jsonify, request
from flask_login import login_required, current_user
from . import bp
from .forms import ActiveToggleForm, BoardMemberForm, CohortForm, PhaseToggleForm, ScorableToggleForm
from ...errors import InvalidOrder, NotFound
from ...models import Cohort
from ...scoring import Phase
from ...services import cohorts as svc
from ...services import roster
from ...utils.decorators import admin_required, super_admin_required


@bp.get("")
@login_required
@admin_required
def list_cohorts():
    rows = Cohort.query.order_by(Cohort.year.desc(), Cohort.term).all()
    return jsonify([c.to_dict() for c in rows])


@bp.post("")
@login_required
@admin_required
def create():
    form = CohortForm()
    if not form.validate_on_submit():
        return jsonify({"error": "InvalidForm", "fields": form.errors}), 400
    cohort = svc.create_cohort(form.term.data, form.year.data)
    return jsonify(cohort.to_dict()), 201


@bp.post("/<int:cohort_id>/activate")
@login_required
@admin_required
def activate(cohort_id):
    return jsonify(svc.activate_cohort(cohort_id).to_dict())


@bp.post("/<int:cohort_id>/deactivate")
@login_required
@admin_required
def deactivate(cohort_id):
    return jsonify(svc.deactivate_cohort(cohort_id).to_dict())


@bp.post("/<int:cohort_id>/phases/<phase>")
@login_required
@admin_required
def toggle_phase(cohort_id, phase):
    try:
        phase = Phase.parse(phase)
    except ValueError:
        raise NotFound(f"Unknown phase {phase!r}") from None
    form = PhaseToggleForm()
    if not form.validate_on_submit():
        return jsonify({"error": "InvalidForm", "fields": form.errors}), 400
    return jsonify(svc.set_phase_open(cohort_id, phase, form.open.data).to_dict())


@bp.delete("/<int:cohort_id>")
@login_required
@super_admin_required
def delete(cohort_id):
    svc.delete_cohort(cohort_id, current_user)
    return jsonify({"success": True})


def _candidate_dict(c):
    return {"id": c.id, "candidate_number": c.candidate_number, "name": c.full_name,
            "custom_order": c.custom_order, "is_active": c.is_active}


@bp.post("/<int:cohort_id>/candidates/order")
@login_required
@admin_required
def reorder(cohort_id):
    payload = request.get_json(silent=True)
    ordered = payload.get("candidate_ids") if isinstance(payload, dict) else payload
    if not isinstance(ordered, list):
        raise InvalidOrder("Expected a JSON list of candidate ids")
    rows = roster.reorder_candidates(cohort_id, ordered)
    return jsonify([_candidate_dict(c) for c in rows])


@bp.post("/<int:cohort_id>/candidates/<int:candidate_id>/active")
@login_required
@admin_required
def toggle_candidate(cohort_id, candidate_id):
    form = ActiveToggleForm()
    if not form.validate_on_submit():
        return jsonify({"error": "InvalidForm", "fields": form.errors}), 400
    return jsonify(_candidate_dict(roster.set_candidate_active(cohort_id, candidate_id, form.active.data)))


@bp.post("/<int:cohort_id>/questions/<int:question_id>/scorable")
@login_required
@admin_required
def toggle_scorable(cohort_id, question_id):
    form = ScorableToggleForm()
    if not form.validate_on_submit():
        return jsonify({"error": "InvalidForm", "fields": form.errors}), 400
    q = roster.set_question_scorable(cohort_id, question_id, form.scorable.data)
    return jsonify({"id": q.id, "category": q.category, "is_scorable": q.is_scorable})


@bp.post("/<int:cohort_id>/board")
@login_required
@admin_required
def add_member(cohort_id):
    form = BoardMemberForm()
    if not form.validate_on_submit():
        return jsonify({"error": "InvalidForm", "fields": form.errors}), 400
    seat = roster.add_board_member(cohort_id, form.user_id.data, form.position.data)
    return jsonify({"cohort_id": seat.cohort_id, "user_id": seat.user_id, "position": seat.position}), 201


@bp.delete("/<int:cohort_id>/board/<int:user_id>")
@login_required
@admin_required
def remove_member(cohort_id, user_id):
    roster.remove_board_member(cohort_id, user_id, current_user)
    return jsonify({"success": True})
