from flask import current_app
from ..extensions import db
from flask_login import UserMixin
from .base import CohortScopedMixin, TimestampMixin
from werkzeug.security import generate_password_hash, check_password_hash

class User(db.Model, UserMixin, TimestampMixin):
    __tablename__ = "users"
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    first_name = db.Column(db.String(120))
    last_name = db.Column(db.String(120))
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(50), default="member")  # member/admin

    memberships = db.relationship("BoardMembership", backref="user", cascade="all, delete")

    def set_password(self, raw):
        self.password_hash = generate_password_hash(raw)

    def check_password(self, raw):
        return check_password_hash(self.password_hash, raw)

    @property
    def display_name(self):
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or self.email

    @property
    def is_admin(self):
        return self.role == "admin" or self.is_super_admin

    @property
    def is_super_admin(self):
        target = current_app.config.get("SUPER_ADMIN_EMAIL")
        return bool(target) and self.email == target


class BoardMembership(db.Model, CohortScopedMixin, TimestampMixin):
    """A user sitting on the board for one cohort."""
    __tablename__ = "board_memberships"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    position = db.Column(db.String(120))

    __table_args__ = (
        db.UniqueConstraint("cohort_id", "user_id", name="uq_board_memberships_cohort_user"),
    )
