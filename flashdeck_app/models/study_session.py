"""Stored study session state, one row per user and deck."""

from datetime import datetime, timezone

from sqlalchemy import JSON

from ..db_instance import db


class StudySessionState(db.Model):
    """
    Serialised ``StudySession`` for a user's deck.

    ``state`` holds card ids and results, never card text.
    """

    __tablename__ = 'study_sessions'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'deck_id', name='uq_study_session_user_deck'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    deck_id = db.Column(db.Integer, db.ForeignKey('decks.id', ondelete='CASCADE'), nullable=False, index=True)
    state = db.Column(JSON, nullable=False, default=dict)
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    deck = db.relationship(
        'Deck',
        backref=db.backref('study_sessions', lazy=True, cascade='all, delete-orphan', passive_deletes=True),
        lazy=True,
    )

    def __repr__(self):
        return f"<StudySessionState user={self.user_id} deck={self.deck_id}>"
