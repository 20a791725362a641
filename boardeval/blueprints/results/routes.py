from flask import Response, jsonify, request
from flask_login import login_required
from . import bp
from ...services.export import leaderboard_csv
from ...services.results import board_progress, candidate_breakdown, compute_leaderboard
from ...utils.decorators import admin_required


@bp.get("/<int:cohort_id>")
@login_required
@admin_required
def leaderboard(cohort_id):
    board = compute_leaderboard(cohort_id)
    data = board.to_dict()
    q = (request.args.get("q") or "").strip().lower()
    if q:
        # search filters the view only; ranks stay those of the full board
        data["candidates"] = [
            row for row in data["candidates"]
            if q in row["first_name"].lower() or q in row["last_name"].lower()
        ]
    return jsonify(data)


@bp.get("/<int:cohort_id>/candidates/<int:candidate_id>")
@login_required
@admin_required
def candidate_detail(cohort_id, candidate_id):
    return jsonify(candidate_breakdown(cohort_id, candidate_id))


@bp.get("/<int:cohort_id>/export.csv")
@login_required
@admin_required
def export_csv(cohort_id):
    board = compute_leaderboard(cohort_id)
    return Response(
        leaderboard_csv(board),
        mimetype="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{board.export_filename}"'},
    )


@bp.get("/<int:cohort_id>/progress")
@login_required
@admin_required
def progress(cohort_id):
    return jsonify(board_progress(cohort_id))
