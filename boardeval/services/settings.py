"""Configuration resolver and writer for per-cohort scoring settings."""

import math

from flask import current_app

from ..extensions import db
from ..errors import InvalidSettings, InvalidWeights
from ..models import CohortSettings
from ..scoring import DEFAULT_SETTINGS, ScoringSettings
from .repository import get_cohort

WEIGHT_TOLERANCE = 0.001


def _pick(value, default):
    return default if value is None else value


def resolve_settings(cohort_id) -> ScoringSettings:
    """Persisted settings for the cohort, defaults where missing.

    Never creates a row: a cohort nobody configured simply runs on the
    defaults.
    """
    row = CohortSettings.query.filter_by(cohort_id=cohort_id).first()
    if row is None:
        return DEFAULT_SETTINGS
    d = DEFAULT_SETTINGS
    return ScoringSettings(
        application_weight=_pick(row.application_weight, d.application_weight),
        interview_weight=_pick(row.interview_weight, d.interview_weight),
        character_weight=_pick(row.character_weight, d.character_weight),
        outlier_std_devs=_pick(row.outlier_std_devs, d.outlier_std_devs),
        top_n=_pick(row.top_n_display, d.top_n),
    )


def validate_settings(settings: ScoringSettings):
    weights = (settings.application_weight, settings.interview_weight, settings.character_weight)
    if any(not math.isfinite(w) or w < 0 for w in weights):
        raise InvalidSettings("Weights must be non-negative numbers")
    total = sum(weights)
    if abs(total - 1.0) > WEIGHT_TOLERANCE:
        raise InvalidWeights(total)
    if not math.isfinite(settings.outlier_std_devs) or settings.outlier_std_devs <= 0:
        raise InvalidSettings("Outlier threshold must be a positive number of standard deviations")
    if settings.top_n < 0:
        raise InvalidSettings("Top N must not be negative")


def save_settings(cohort_id, application_weight, interview_weight, character_weight,
                  outlier_std_devs, top_n) -> ScoringSettings:
    """Validate and upsert the cohort's settings row."""
    get_cohort(cohort_id)
    settings = ScoringSettings(
        application_weight=float(application_weight),
        interview_weight=float(interview_weight),
        character_weight=float(character_weight),
        outlier_std_devs=float(outlier_std_devs),
        top_n=int(top_n),
    )
    validate_settings(settings)

    row = CohortSettings.query.filter_by(cohort_id=cohort_id).first()
    if row is None:
        row = CohortSettings(cohort_id=cohort_id)
        db.session.add(row)
    row.application_weight = settings.application_weight
    row.interview_weight = settings.interview_weight
    row.character_weight = settings.character_weight
    row.outlier_std_devs = settings.outlier_std_devs
    row.top_n_display = settings.top_n
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.logger.info("cohort %s settings saved: %s", cohort_id, settings.to_dict())
    return settings
