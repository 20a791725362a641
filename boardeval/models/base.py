from sqlalchemy.orm import declared_attr

from ..extensions import db

class CohortScopedMixin:
    @declared_attr
    def cohort_id(cls):
        return db.Column(db.Integer, db.ForeignKey("cohorts.id", ondelete="CASCADE"), nullable=False, index=True)

class TimestampMixin:
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())
