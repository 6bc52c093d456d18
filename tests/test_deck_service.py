"""
Tests for DeckService

Tests cover:
- Ownership scoping of every query
- Ordering of the deck list
- Partial updates and the updated_at bump
- Cascade delete of a deck's cards
"""

from datetime import datetime, timedelta, timezone

from flashdeck_app.core.signals import content_created, content_deleted
from flashdeck_app.db_instance import db
from flashdeck_app.models import Card, Deck
from flashdeck_app.modules.decks.services import DeckService

from conftest import make_deck


class TestDeckQueries:
    def test_user_decks_are_scoped_to_owner(self, free_user, other_user):
        mine = make_deck(free_user, name='Mine')
        make_deck(other_user, name='Theirs')

        decks = DeckService.get_user_decks(free_user.user_id)
        assert [d.id for d in decks] == [mine.id]

    def test_user_decks_newest_first(self, free_user):
        older = make_deck(free_user, name='Older')
        make_deck(free_user, name='Newer')
        older.created_at = datetime.now(timezone.utc) - timedelta(days=1)
        db.session.commit()

        assert [d.name for d in DeckService.get_user_decks(free_user.user_id)] == ['Newer', 'Older']

    def test_get_deck_by_id_hides_other_users_decks(self, free_user, other_user):
        deck = make_deck(other_user)
        assert DeckService.get_deck_by_id(deck.id, free_user.user_id) is None
        assert DeckService.get_deck_by_id(deck.id, other_user.user_id).id == deck.id

    def test_get_deck_with_cards(self, free_user):
        deck = make_deck(free_user, cards=3)

        result = DeckService.get_deck_with_cards(deck.id, free_user.user_id)
        assert result['deck'].id == deck.id
        assert [c.front for c in result['cards']] == ['Front 1', 'Front 2', 'Front 3']

    def test_get_deck_with_cards_missing(self, free_user):
        assert DeckService.get_deck_with_cards(9999, free_user.user_id) is None

    def test_count_user_decks(self, free_user, other_user):
        make_deck(free_user)
        make_deck(free_user, name='Second')
        make_deck(other_user)
        assert DeckService.count_user_decks(free_user.user_id) == 2


class TestDeckMutations:
    def test_create_deck_emits_signal(self, free_user):
        received = []

        def listener(sender, **kwargs):
            received.append(kwargs)

        content_created.connect(listener)
        try:
            deck = DeckService.create_deck(free_user.user_id, 'French', '')
        finally:
            content_created.disconnect(listener)

        assert deck.description is None
        assert received == [{
            'user_id': free_user.user_id,
            'content_type': 'deck',
            'content_id': deck.id,
            'deck_id': deck.id,
        }]

    def test_update_deck_changes_only_given_fields(self, free_user):
        deck = make_deck(free_user, name='Old name', description='Keep me')
        before = deck.updated_at

        updated = DeckService.update_deck(deck.id, free_user.user_id, name='New name')

        assert updated.name == 'New name'
        assert updated.description == 'Keep me'
        assert updated.updated_at >= before

    def test_update_deck_not_owned(self, free_user, other_user):
        deck = make_deck(other_user, name='Theirs')
        assert DeckService.update_deck(deck.id, free_user.user_id, name='Hijacked') is None
        assert db.session.get(Deck, deck.id).name == 'Theirs'

    def test_delete_deck_cascades_cards(self, free_user):
        deck = make_deck(free_user, cards=4)
        deck_id = deck.id
        received = []

        def listener(sender, **kwargs):
            received.append(kwargs['content_type'])

        content_deleted.connect(listener)
        try:
            deleted = DeckService.delete_deck(deck_id, free_user.user_id)
        finally:
            content_deleted.disconnect(listener)

        assert deleted.id == deck_id
        assert db.session.get(Deck, deck_id) is None
        assert Card.query.filter_by(deck_id=deck_id).count() == 0
        assert received == ['deck']

    def test_delete_deck_not_owned(self, free_user, other_user):
        deck = make_deck(other_user)
        assert DeckService.delete_deck(deck.id, free_user.user_id) is None
        assert db.session.get(Deck, deck.id) is not None
