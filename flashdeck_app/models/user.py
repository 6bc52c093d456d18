"""User model backing Flask-Login."""

from __future__ import annotations

from flask_login import UserMixin
from sqlalchemy.sql import func
from werkzeug.security import check_password_hash, generate_password_hash

from ..db_instance import db


class User(UserMixin, db.Model):
    """Application user model. ``plan_role`` carries the subscription tier."""

    __tablename__ = 'users'

    ROLE_ADMIN = 'admin'
    ROLE_PRO = 'pro'
    ROLE_FREE = 'free'
    ROLE_LABELS = {
        ROLE_ADMIN: 'Administrator',
        ROLE_PRO: 'Pro',
        ROLE_FREE: 'Free',
    }

    user_id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    plan_role = db.Column(db.String(50), default=ROLE_FREE, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())

    decks = db.relationship('Deck', backref='owner', lazy=True, cascade='all, delete-orphan')

    def get_id(self):
        return str(self.user_id)

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    @property
    def plan_label(self) -> str:
        return self.ROLE_LABELS.get(self.plan_role, self.plan_role)

    def __repr__(self):
        return f"<User {self.username} ({self.plan_role})>"
