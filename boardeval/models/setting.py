from ..extensions import db
from .base import CohortScopedMixin, TimestampMixin


class CohortSettings(db.Model, CohortScopedMixin, TimestampMixin):
    """Scoring configuration for one cohort. Absent row = engine defaults."""
    __tablename__ = 'cohort_settings'
    id = db.Column(db.Integer, primary_key=True)
    application_weight = db.Column(db.Float)
    interview_weight = db.Column(db.Float)
    character_weight = db.Column(db.Float)
    outlier_std_devs = db.Column(db.Float)
    top_n_display = db.Column(db.Integer)

    __table_args__ = (
        db.UniqueConstraint('cohort_id', name='uq_cohort_settings_cohort'),
    )

    def __repr__(self):
        return (f"<CohortSettings cohort_id={self.cohort_id} weights="
                f"{self.application_weight}/{self.interview_weight}/{self.character_weight}>")
