from ..extensions import db
from .base import CohortScopedMixin, TimestampMixin

class Question(db.Model, CohortScopedMixin, TimestampMixin):
    """Application or interview question."""
    __tablename__ = "questions"

    id = db.Column(db.Integer, primary_key=True)
    question_text = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(20), nullable=False, index=True)  # application/interview
    question_order = db.Column(db.Integer, nullable=False, default=0)
    # unscorable questions stay visible on the ballot but take no score
    is_scorable = db.Column(db.Boolean, nullable=False, default=True)

    __table_args__ = (
        db.CheckConstraint("category IN ('application', 'interview')", name="ck_questions_category"),
    )

    def __repr__(self) -> str:
        return f"<Question id={self.id} category={self.category} order={self.question_order}>"
