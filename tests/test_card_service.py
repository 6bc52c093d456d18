"""
Tests for CardService

Cards are only reachable through a deck the user owns.
"""

import pytest

from flashdeck_app.core.error_handlers import NotFoundError
from flashdeck_app.db_instance import db
from flashdeck_app.models import Card
from flashdeck_app.modules.decks.services import CardService

from conftest import make_deck


def test_create_card(free_user):
    deck = make_deck(free_user)
    card = CardService.create_card(free_user.user_id, deck.id, 'Hola', 'Hello')

    assert card.id is not None
    assert card.deck_id == deck.id
    assert CardService.get_card_by_id(card.id, free_user.user_id).front == 'Hola'


def test_create_card_in_foreign_deck_fails(free_user, other_user):
    deck = make_deck(other_user)

    with pytest.raises(NotFoundError, match='Deck not found'):
        CardService.create_card(free_user.user_id, deck.id, 'Front', 'Back')
    assert Card.query.count() == 0


def test_cards_listed_most_recently_updated_first(free_user):
    deck = make_deck(free_user, cards=3)
    first = Card.query.filter_by(deck_id=deck.id, front='Front 1').one()

    CardService.update_card(first.id, free_user.user_id, back='Edited')

    cards = CardService.get_cards_by_deck_id(deck.id, free_user.user_id)
    assert cards[0].id == first.id
    assert len(cards) == 3


def test_get_cards_of_foreign_deck_is_empty(free_user, other_user):
    deck = make_deck(other_user, cards=2)
    assert CardService.get_cards_by_deck_id(deck.id, free_user.user_id) == []


def test_update_card_partial(free_user):
    deck = make_deck(free_user, cards=1)
    card = deck.cards[0]

    updated = CardService.update_card(card.id, free_user.user_id, front='New front')

    assert updated.front == 'New front'
    assert updated.back == 'Back 1'


def test_update_card_not_owned(free_user, other_user):
    deck = make_deck(other_user, cards=1)

    with pytest.raises(NotFoundError, match='Card not found'):
        CardService.update_card(deck.cards[0].id, free_user.user_id, front='Nope')


def test_delete_card(free_user):
    deck = make_deck(free_user, cards=2)
    card_id = deck.cards[0].id

    deleted = CardService.delete_card(card_id, free_user.user_id)

    assert deleted.id == card_id
    assert db.session.get(Card, card_id) is None
    assert Card.query.filter_by(deck_id=deck.id).count() == 1


def test_delete_card_not_owned(free_user, other_user):
    deck = make_deck(other_user, cards=1)

    with pytest.raises(NotFoundError):
        CardService.delete_card(deck.cards[0].id, free_user.user_id)


def test_delete_cards_by_deck_id(free_user):
    deck = make_deck(free_user, cards=5)
    keep = make_deck(free_user, name='Other', cards=2)

    assert CardService.delete_cards_by_deck_id(deck.id, free_user.user_id) == 5
    assert Card.query.filter_by(deck_id=deck.id).count() == 0
    assert Card.query.filter_by(deck_id=keep.id).count() == 2
