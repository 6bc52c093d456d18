"""Deck and card models."""

from __future__ import annotations

from datetime import datetime, timezone

from ..db_instance import db


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _isoformat(value):
    return value.isoformat() if value else None


class Deck(db.Model):
    """A named collection of cards owned by a single user."""

    __tablename__ = 'decks'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    cards = db.relationship(
        'Card',
        backref='deck',
        lazy=True,
        cascade='all, delete-orphan',
        passive_deletes=True,
        order_by='Card.id',
    )

    def to_dict(self, include_cards: bool = False) -> dict[str, object]:
        data = {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'description': self.description,
            'created_at': _isoformat(self.created_at),
            'updated_at': _isoformat(self.updated_at),
        }
        if include_cards:
            data['cards'] = [card.to_dict() for card in self.cards]
        return data

    def __repr__(self):
        return f"<Deck {self.id} {self.name!r}>"


class Card(db.Model):
    """A front/back question-answer pair belonging to a deck."""

    __tablename__ = 'cards'

    id = db.Column(db.Integer, primary_key=True)
    deck_id = db.Column(db.Integer, db.ForeignKey('decks.id', ondelete='CASCADE'), nullable=False, index=True)
    front = db.Column(db.Text, nullable=False)  # question / prompt side
    back = db.Column(db.Text, nullable=False)  # answer side
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    def to_dict(self) -> dict[str, object]:
        return {
            'id': self.id,
            'deck_id': self.deck_id,
            'front': self.front,
            'back': self.back,
            'created_at': _isoformat(self.created_at),
            'updated_at': _isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<Card {self.id} deck={self.deck_id}>"
