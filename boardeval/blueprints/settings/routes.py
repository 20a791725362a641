from flask import jsonify
from flask_login import login_required
from . import bp
from .forms import WeightsForm
from ...models import CohortSettings
from ...services.repository import get_cohort
from ...services.settings import resolve_settings, save_settings
from ...utils.decorators import admin_required


@bp.get("/<int:cohort_id>/weights")
@login_required
@admin_required
def weights(cohort_id):
    get_cohort(cohort_id)
    settings = resolve_settings(cohort_id)
    persisted = CohortSettings.query.filter_by(cohort_id=cohort_id).first() is not None
    return jsonify({"cohort_id": cohort_id, "settings": settings.to_dict(), "is_default": not persisted})


@bp.post("/<int:cohort_id>/weights")
@login_required
@admin_required
def update_weights(cohort_id):
    form = WeightsForm()
    if not form.validate_on_submit():
        return jsonify({"error": "InvalidForm", "fields": form.errors}), 400
    settings = save_settings(
        cohort_id,
        application_weight=form.application_weight.data,
        interview_weight=form.interview_weight.data,
        character_weight=form.character_weight.data,
        outlier_std_devs=form.outlier_std_devs.data,
        top_n=form.top_n_display.data,
    )
    return jsonify({"cohort_id": cohort_id, "settings": settings.to_dict(), "is_default": False})
