"""
Card Service - card persistence, ownership checked through the parent deck.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from flask import current_app

from flashdeck_app.core.error_handlers import NotFoundError
from flashdeck_app.core.signals import content_created, content_deleted
from flashdeck_app.models import db, Card, Deck

UPDATABLE_FIELDS = ('front', 'back')


class CardService:
    """CRUD operations over cards whose deck belongs to the user."""

    @staticmethod
    def _owned_query(user_id: int):
        return Card.query.join(Deck, Card.deck_id == Deck.id).filter(Deck.user_id == user_id)

    @staticmethod
    def _require_deck(deck_id: int, user_id: int) -> Deck:
        deck = Deck.query.filter(Deck.id == deck_id, Deck.user_id == user_id).first()
        if deck is None:
            raise NotFoundError("Deck not found", resource='deck')
        return deck

    @staticmethod
    def _require_card(card_id: int, user_id: int) -> Card:
        card = CardService.get_card_by_id(card_id, user_id)
        if card is None:
            raise NotFoundError("Card not found", resource='card')
        return card

    @staticmethod
    def get_cards_by_deck_id(deck_id: int, user_id: int) -> list[Card]:
        """Cards of an owned deck, most recently updated first."""
        return (
            CardService._owned_query(user_id)
            .filter(Card.deck_id == deck_id)
            .order_by(Card.updated_at.desc(), Card.id.desc())
            .all()
        )

    @staticmethod
    def get_card_by_id(card_id: int, user_id: int) -> Optional[Card]:
        return CardService._owned_query(user_id).filter(Card.id == card_id).first()

    @staticmethod
    def create_card(user_id: int, deck_id: int, front: str, back: str, commit: bool = True) -> Card:
        """
        Add a card to one of the user's decks.

        Raises:
            NotFoundError: the deck does not exist or is not owned by the user.
        """
        CardService._require_deck(deck_id, user_id)

        card = Card(deck_id=deck_id, front=front, back=back)
        db.session.add(card)
        if commit:
            db.session.commit()
        else:
            db.session.flush()

        content_created.send(None, user_id=user_id, content_type='card', content_id=card.id, deck_id=deck_id)
        return card

    @staticmethod
    def update_card(card_id: int, user_id: int, **fields) -> Card:
        card = CardService._require_card(card_id, user_id)

        for key in UPDATABLE_FIELDS:
            if key in fields:
                setattr(card, key, fields[key])
        card.updated_at = datetime.now(timezone.utc)
        db.session.commit()
        return card

    @staticmethod
    def delete_card(card_id: int, user_id: int) -> Card:
        card = CardService._require_card(card_id, user_id)
        deck_id = card.deck_id

        db.session.delete(card)
        db.session.commit()

        content_deleted.send(None, user_id=user_id, content_type='card', content_id=card_id, deck_id=deck_id)
        return card

    @staticmethod
    def delete_cards_by_deck_id(deck_id: int, user_id: int) -> int:
        """Remove every card of an owned deck and return how many were deleted."""
        CardService._require_deck(deck_id, user_id)

        deleted = Card.query.filter(Card.deck_id == deck_id).delete(synchronize_session=False)
        db.session.commit()

        current_app.logger.info(f"Deleted {deleted} cards from deck {deck_id} for user {user_id}")
        content_deleted.send(None, user_id=user_id, content_type='deck_cards', content_id=deck_id, deck_id=deck_id)
        return deleted
