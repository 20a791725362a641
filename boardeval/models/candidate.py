from ..extensions import db
from .base import CohortScopedMixin, TimestampMixin

class Candidate(db.Model, CohortScopedMixin, TimestampMixin):
    __tablename__ = "candidates"

    id = db.Column(db.Integer, primary_key=True)
    # CohortScopedMixin: cohort_id
    first_name = db.Column(db.String(120), nullable=False)
    last_name = db.Column(db.String(120), nullable=False, default="")
    email = db.Column(db.String(254))

    # stable identifier (navigation, uniqueness) vs. presentation order
    candidate_number = db.Column(db.Integer)
    custom_order = db.Column(db.Integer)
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)

    ratings = db.relationship("Rating", backref="candidate", cascade="all, delete")

    __table_args__ = (
        db.UniqueConstraint("cohort_id", "candidate_number", name="uq_candidates_cohort_number"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<Candidate id={self.id} number={self.candidate_number} name={self.full_name!r}>"
