"""Initial board evaluation schema

Revision ID: 0001_initial
Revises: None
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now()),
    ]


def _cohort_fk():
    return sa.Column("cohort_id", sa.Integer, sa.ForeignKey("cohorts.id", ondelete="CASCADE"), nullable=False, index=True)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("first_name", sa.String(120)),
        sa.Column("last_name", sa.String(120)),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(50)),
        *_timestamps(),
    )

    op.create_table(
        "cohorts",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("term", sa.String(40), nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.false(), index=True),
        sa.Column("application_open", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("interview_open", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("character_open", sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint("term", "year", name="uq_cohorts_term_year"),
    )

    op.create_table(
        "board_memberships",
        sa.Column("id", sa.Integer, primary_key=True),
        _cohort_fk(),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("position", sa.String(120)),
        *_timestamps(),
        sa.UniqueConstraint("cohort_id", "user_id", name="uq_board_memberships_cohort_user"),
    )

    op.create_table(
        "candidates",
        sa.Column("id", sa.Integer, primary_key=True),
        _cohort_fk(),
        sa.Column("first_name", sa.String(120), nullable=False),
        sa.Column("last_name", sa.String(120), nullable=False, server_default=""),
        sa.Column("email", sa.String(254)),
        sa.Column("candidate_number", sa.Integer),
        sa.Column("custom_order", sa.Integer),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true(), index=True),
        *_timestamps(),
        sa.UniqueConstraint("cohort_id", "candidate_number", name="uq_candidates_cohort_number"),
    )

    op.create_table(
        "questions",
        sa.Column("id", sa.Integer, primary_key=True),
        _cohort_fk(),
        sa.Column("question_text", sa.Text, nullable=False),
        sa.Column("category", sa.String(20), nullable=False, index=True),
        sa.Column("question_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_scorable", sa.Boolean, nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.CheckConstraint("category IN ('application', 'interview')", name="ck_questions_category"),
    )

    op.create_table(
        "character_traits",
        sa.Column("id", sa.Integer, primary_key=True),
        _cohort_fk(),
        sa.Column("trait_name", sa.String(200), nullable=False),
        sa.Column("trait_order", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
        sa.UniqueConstraint("cohort_id", "trait_name", name="uq_traits_cohort_name"),
    )

    op.create_table(
        "cohort_settings",
        sa.Column("id", sa.Integer, primary_key=True),
        _cohort_fk(),
        sa.Column("application_weight", sa.Float),
        sa.Column("interview_weight", sa.Float),
        sa.Column("character_weight", sa.Float),
        sa.Column("outlier_std_devs", sa.Float),
        sa.Column("top_n_display", sa.Integer),
        *_timestamps(),
        sa.UniqueConstraint("cohort_id", name="uq_cohort_settings_cohort"),
    )

    op.create_table(
        "ratings",
        sa.Column("id", sa.Integer, primary_key=True),
        _cohort_fk(),
        sa.Column("candidate_id", sa.Integer, sa.ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("rating_type", sa.String(20), nullable=False),
        sa.Column("voter_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), index=True),
        sa.Column("legacy_voter_alias", sa.String(200)),
        *_timestamps(),
        sa.UniqueConstraint("candidate_id", "voter_id", "cohort_id", "rating_type", name="uq_ratings_voter"),
        sa.UniqueConstraint("candidate_id", "legacy_voter_alias", "cohort_id", "rating_type", name="uq_ratings_alias"),
        sa.CheckConstraint("(voter_id IS NULL) <> (legacy_voter_alias IS NULL)", name="ck_ratings_one_rater"),
        sa.CheckConstraint("rating_type IN ('application', 'interview', 'character')", name="ck_ratings_type"),
    )

    op.create_table(
        "rating_scores",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("rating_id", sa.Integer, sa.ForeignKey("ratings.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("question_id", sa.Integer, sa.ForeignKey("questions.id", ondelete="CASCADE"), index=True),
        sa.Column("trait_id", sa.Integer, sa.ForeignKey("character_traits.id", ondelete="CASCADE"), index=True),
        sa.Column("score", sa.Float, nullable=False),
        sa.Column("comment", sa.Text),
        *_timestamps(),
        sa.UniqueConstraint("rating_id", "question_id", name="uq_rating_scores_question"),
        sa.UniqueConstraint("rating_id", "trait_id", name="uq_rating_scores_trait"),
        sa.CheckConstraint("(question_id IS NULL) <> (trait_id IS NULL)", name="ck_rating_scores_one_item"),
    )


def downgrade() -> None:
    for name in ("rating_scores", "ratings", "cohort_settings", "character_traits",
                 "questions", "candidates", "board_memberships", "cohorts", "users"):
        op.drop_table(name)
