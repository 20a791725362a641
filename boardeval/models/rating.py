from ..extensions import db
from ..scoring import HistoricalAlias, ItemKey, ItemKind, LiveUser, Phase
from .base import CohortScopedMixin, TimestampMixin

class Rating(db.Model, CohortScopedMixin, TimestampMixin):
    """One rater's ballot for one candidate in one phase."""
    __tablename__ = "ratings"

    id = db.Column(db.Integer, primary_key=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False, index=True)
    rating_type = db.Column(db.String(20), nullable=False)  # application/interview/character

    # rater: a live user, or a free-text alias for imported history. Never both.
    voter_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), index=True)
    legacy_voter_alias = db.Column(db.String(200))

    scores = db.relationship("RatingScore", backref="rating", cascade="all, delete")

    __table_args__ = (
        db.UniqueConstraint("candidate_id", "voter_id", "cohort_id", "rating_type", name="uq_ratings_voter"),
        db.UniqueConstraint("candidate_id", "legacy_voter_alias", "cohort_id", "rating_type", name="uq_ratings_alias"),
        db.CheckConstraint(
            "(voter_id IS NULL) <> (legacy_voter_alias IS NULL)",
            name="ck_ratings_one_rater",
        ),
        db.CheckConstraint(
            "rating_type IN ('application', 'interview', 'character')",
            name="ck_ratings_type",
        ),
    )

    @property
    def phase(self) -> Phase:
        return Phase(self.rating_type)

    @property
    def rater(self):
        if self.voter_id is not None:
            return LiveUser(self.voter_id)
        return HistoricalAlias(self.legacy_voter_alias)

    @staticmethod
    def rater_columns(rater):
        """Column filter/values for a RaterIdentity."""
        if isinstance(rater, LiveUser):
            return {"voter_id": rater.user_id, "legacy_voter_alias": None}
        if isinstance(rater, HistoricalAlias):
            return {"voter_id": None, "legacy_voter_alias": rater.name}
        raise TypeError(f"not a rater identity: {rater!r}")

    def __repr__(self) -> str:
        return f"<Rating id={self.id} candidate_id={self.candidate_id} type={self.rating_type} rater={self.rater.label}>"


class RatingScore(db.Model, TimestampMixin):
    __tablename__ = "rating_scores"

    id = db.Column(db.Integer, primary_key=True)
    rating_id = db.Column(db.Integer, db.ForeignKey("ratings.id", ondelete="CASCADE"), nullable=False, index=True)
    # exactly one of question_id / trait_id
    question_id = db.Column(db.Integer, db.ForeignKey("questions.id", ondelete="CASCADE"), index=True)
    trait_id = db.Column(db.Integer, db.ForeignKey("character_traits.id", ondelete="CASCADE"), index=True)
    score = db.Column(db.Float, nullable=False)
    comment = db.Column(db.Text)

    __table_args__ = (
        db.UniqueConstraint("rating_id", "question_id", name="uq_rating_scores_question"),
        db.UniqueConstraint("rating_id", "trait_id", name="uq_rating_scores_trait"),
        db.CheckConstraint(
            "(question_id IS NULL) <> (trait_id IS NULL)",
            name="ck_rating_scores_one_item",
        ),
    )

    @property
    def item(self) -> ItemKey:
        if self.trait_id is not None:
            return ItemKey(ItemKind.TRAIT, self.trait_id)
        return ItemKey(ItemKind.QUESTION, self.question_id)

    @staticmethod
    def kind_filter(kind: ItemKind):
        if kind is ItemKind.TRAIT:
            return RatingScore.trait_id.isnot(None)
        return RatingScore.question_id.isnot(None)

    def __repr__(self) -> str:
        return f"<RatingScore id={self.id} rating_id={self.rating_id} item={self.item}>"
