from ..extensions import db
from ..scoring import Phase
from .base import TimestampMixin

PHASE_FLAGS = {
    Phase.APPLICATION: "application_open",
    Phase.INTERVIEW: "interview_open",
    Phase.CHARACTER: "character_open",
}

class Cohort(db.Model, TimestampMixin):
    __tablename__ = "cohorts"

    id = db.Column(db.Integer, primary_key=True)
    term = db.Column(db.String(40), nullable=False)
    year = db.Column(db.Integer, nullable=False)
    # at most one row is active; enforced by services.cohorts.activate_cohort
    is_active = db.Column(db.Boolean, nullable=False, default=False, index=True)
    application_open = db.Column(db.Boolean, nullable=False, default=False)
    interview_open = db.Column(db.Boolean, nullable=False, default=False)
    character_open = db.Column(db.Boolean, nullable=False, default=False)

    candidates = db.relationship("Candidate", backref="cohort", cascade="all, delete")
    questions = db.relationship("Question", backref="cohort", cascade="all, delete")
    traits = db.relationship("CharacterTrait", backref="cohort", cascade="all, delete")
    ratings = db.relationship("Rating", backref="cohort", cascade="all, delete")
    settings = db.relationship("CohortSettings", backref="cohort", uselist=False, cascade="all, delete")
    memberships = db.relationship("BoardMembership", backref="cohort", cascade="all, delete")

    __table_args__ = (
        db.UniqueConstraint("term", "year", name="uq_cohorts_term_year"),
    )

    def is_phase_open(self, phase) -> bool:
        return bool(self.is_active and getattr(self, PHASE_FLAGS[Phase.parse(phase)]))

    def to_dict(self):
        return {
            "id": self.id,
            "term": self.term,
            "year": self.year,
            "is_active": self.is_active,
            "application_open": self.application_open,
            "interview_open": self.interview_open,
            "character_open": self.character_open,
        }

    def __repr__(self) -> str:
        return f"<Cohort id={self.id} {self.term} {self.year} active={self.is_active}>"
