"""
Deck Service - user scoped deck persistence.

Every query filters on the owning user, so a deck that belongs to someone
else behaves exactly like a deck that does not exist.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from flask import current_app

from flashdeck_app.core.signals import content_created, content_deleted
from flashdeck_app.models import db, Card, Deck

UPDATABLE_FIELDS = ('name', 'description')


class DeckService:
    """CRUD operations over decks owned by a user."""

    @staticmethod
    def _owned_query(user_id: int):
        return Deck.query.filter(Deck.user_id == user_id)

    @staticmethod
    def get_user_decks(user_id: int) -> list[Deck]:
        """All decks of the user, newest first."""
        return (
            DeckService._owned_query(user_id)
            .order_by(Deck.created_at.desc(), Deck.id.desc())
            .all()
        )

    @staticmethod
    def count_user_decks(user_id: int) -> int:
        return DeckService._owned_query(user_id).count()

    @staticmethod
    def get_deck_by_id(deck_id: int, user_id: int) -> Optional[Deck]:
        return DeckService._owned_query(user_id).filter(Deck.id == deck_id).first()

    @staticmethod
    def get_deck_with_cards(deck_id: int, user_id: int) -> Optional[dict]:
        """Return ``{'deck': Deck, 'cards': [Card]}`` or None when the deck is not the user's."""
        deck = DeckService.get_deck_by_id(deck_id, user_id)
        if deck is None:
            return None

        cards = Card.query.filter(Card.deck_id == deck.id).order_by(Card.id).all()
        return {'deck': deck, 'cards': cards}

    @staticmethod
    def create_deck(user_id: int, name: str, description: Optional[str] = None) -> Deck:
        deck = Deck(user_id=user_id, name=name, description=description or None)
        db.session.add(deck)
        db.session.commit()

        current_app.logger.info(f"Deck created: {deck.id} ({name!r}) for user {user_id}")
        content_created.send(None, user_id=user_id, content_type='deck', content_id=deck.id, deck_id=deck.id)
        return deck

    @staticmethod
    def update_deck(deck_id: int, user_id: int, **fields) -> Optional[Deck]:
        """
        Partially update name/description.

        Returns:
            The updated deck, or None if the user does not own it.
        """
        deck = DeckService.get_deck_by_id(deck_id, user_id)
        if deck is None:
            return None

        for key in UPDATABLE_FIELDS:
            if key in fields:
                value = fields[key]
                if key == 'description':
                    value = value or None
                setattr(deck, key, value)
        deck.updated_at = datetime.now(timezone.utc)
        db.session.commit()

        current_app.logger.info(f"Deck updated: {deck.id} for user {user_id}")
        return deck

    @staticmethod
    def delete_deck(deck_id: int, user_id: int) -> Optional[Deck]:
        """
        Delete a deck and, through the cascade, all of its cards.

        Returns:
            The deleted deck, or None if the user does not own it.
        """
        deck = DeckService.get_deck_by_id(deck_id, user_id)
        if deck is None:
            return None

        db.session.delete(deck)
        db.session.commit()

        current_app.logger.info(f"Deck deleted: {deck_id} for user {user_id}")
        content_deleted.send(None, user_id=user_id, content_type='deck', content_id=deck_id, deck_id=deck_id)
        return deck
