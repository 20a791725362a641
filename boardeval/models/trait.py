from ..extensions import db
from .base import CohortScopedMixin, TimestampMixin

class CharacterTrait(db.Model, CohortScopedMixin, TimestampMixin):
    __tablename__ = "character_traits"

    id = db.Column(db.Integer, primary_key=True)
    trait_name = db.Column(db.String(200), nullable=False)
    trait_order = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (
        db.UniqueConstraint("cohort_id", "trait_name", name="uq_traits_cohort_name"),
    )

    def __repr__(self) -> str:
        return f"<CharacterTrait id={self.id} name={self.trait_name!r}>"
