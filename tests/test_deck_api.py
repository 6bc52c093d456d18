"""
Tests for the deck and card JSON API

Tests cover:
- Authentication and ownership (401 / 404)
- marshmallow validation limits
- The free plan deck limit
- Card CRUD nested under a deck
"""

from flashdeck_app.db_instance import db
from flashdeck_app.models import Card, Deck

from conftest import login, make_deck


def test_requires_login(client, app):
    response = client.get('/api/decks')
    assert response.status_code == 401
    assert response.get_json()['success'] is False


def test_list_decks_only_own(client, free_user, other_user):
    make_deck(free_user, name='Mine')
    make_deck(other_user, name='Theirs')
    login(client, free_user.user_id)

    payload = client.get('/api/decks').get_json()

    assert payload['success'] is True
    assert [d['name'] for d in payload['data']] == ['Mine']
    assert payload['data'][0]['card_count'] == 0


def test_create_deck(client, free_user):
    login(client, free_user.user_id)

    response = client.post('/api/decks', json={'name': '  Biology  ', 'description': 'Cells'})
    payload = response.get_json()

    assert response.status_code == 201
    assert payload['data']['name'] == 'Biology'
    assert payload['message'] == 'Deck created successfully'
    assert Deck.query.filter_by(user_id=free_user.user_id).count() == 1


def test_create_deck_validation(client, free_user):
    login(client, free_user.user_id)

    response = client.post('/api/decks', json={'name': '', 'description': 'x' * 501})
    payload = response.get_json()

    assert response.status_code == 400
    assert payload['code'] == 'VALIDATION_ERROR'
    assert 'name' in payload['details']['errors']
    assert 'description' in payload['details']['errors']


def test_create_deck_name_too_long(client, free_user):
    login(client, free_user.user_id)

    response = client.post('/api/decks', json={'name': 'n' * 101})
    assert response.status_code == 400
    assert Deck.query.count() == 0


def test_free_user_deck_limit(client, free_user):
    for i in range(3):
        make_deck(free_user, name=f'Deck {i}')
    login(client, free_user.user_id)

    response = client.post('/api/decks', json={'name': 'Fourth'})
    payload = response.get_json()

    assert response.status_code == 403
    assert payload['requires_upgrade'] is True
    assert payload['message'] == 'Free users are limited to 3 decks. Upgrade to Pro for unlimited decks.'
    assert Deck.query.filter_by(user_id=free_user.user_id).count() == 3


def test_free_deck_limit_is_configurable(client, app, free_user):
    app.config['QUOTA_LIMIT_DECKS_FREE'] = 1
    make_deck(free_user)
    login(client, free_user.user_id)

    response = client.post('/api/decks', json={'name': 'Second'})
    assert response.status_code == 403
    assert 'limited to 1 decks' in response.get_json()['message']


def test_pro_user_has_no_deck_limit(client, pro_user):
    for i in range(5):
        make_deck(pro_user, name=f'Deck {i}')
    login(client, pro_user.user_id)

    response = client.post('/api/decks', json={'name': 'Sixth'})
    assert response.status_code == 201


def test_get_deck_with_cards(client, free_user):
    deck = make_deck(free_user, cards=2)
    login(client, free_user.user_id)

    payload = client.get(f'/api/decks/{deck.id}').get_json()

    assert payload['data']['id'] == deck.id
    assert [c['front'] for c in payload['data']['cards']] == ['Front 1', 'Front 2']


def test_foreign_deck_is_not_found(client, free_user, other_user):
    deck = make_deck(other_user, cards=1)
    login(client, free_user.user_id)

    assert client.get(f'/api/decks/{deck.id}').status_code == 404
    assert client.patch(f'/api/decks/{deck.id}', json={'name': 'Mine now'}).status_code == 404
    assert client.delete(f'/api/decks/{deck.id}').status_code == 404
    assert client.post(f'/api/decks/{deck.id}/cards', json={'front': 'a', 'back': 'b'}).status_code == 404
    assert client.get(f'/api/decks/{deck.id}/cards/{deck.cards[0].id}').status_code == 404
    assert db.session.get(Deck, deck.id).name == 'Spanish basics'


def test_update_deck(client, free_user):
    deck = make_deck(free_user)
    login(client, free_user.user_id)

    response = client.patch(f'/api/decks/{deck.id}', json={'description': 'Updated'})
    payload = response.get_json()

    assert response.status_code == 200
    assert payload['data']['name'] == 'Spanish basics'
    assert payload['data']['description'] == 'Updated'


def test_delete_deck(client, free_user):
    deck = make_deck(free_user, cards=3)
    deck_id = deck.id
    login(client, free_user.user_id)

    response = client.delete(f'/api/decks/{deck_id}')

    assert response.status_code == 200
    assert response.get_json()['data']['id'] == deck_id
    assert Card.query.filter_by(deck_id=deck_id).count() == 0


def test_card_crud(client, free_user):
    deck = make_deck(free_user)
    login(client, free_user.user_id)

    created = client.post(f'/api/decks/{deck.id}/cards', json={'front': 'Perro', 'back': 'Dog'})
    assert created.status_code == 201
    card_id = created.get_json()['data']['id']
    assert created.get_json()['data']['deck_name'] == 'Spanish basics'

    updated = client.patch(f'/api/decks/{deck.id}/cards/{card_id}', json={'front': 'Gato', 'back': 'Cat'})
    assert updated.get_json()['data']['front'] == 'Gato'

    listed = client.get(f'/api/decks/{deck.id}/cards').get_json()
    assert [c['back'] for c in listed['data']] == ['Cat']

    deleted = client.delete(f'/api/decks/{deck.id}/cards/{card_id}')
    assert deleted.status_code == 200
    assert Card.query.count() == 0


def test_card_validation(client, free_user):
    deck = make_deck(free_user)
    login(client, free_user.user_id)

    response = client.post(f'/api/decks/{deck.id}/cards', json={'front': '   ', 'back': 'b' * 1001})
    errors = response.get_json()['details']['errors']

    assert response.status_code == 400
    assert set(errors) == {'front', 'back'}


def test_card_must_belong_to_deck_in_url(client, free_user):
    deck = make_deck(free_user, cards=1)
    other_deck = make_deck(free_user, name='Other')
    login(client, free_user.user_id)

    response = client.get(f'/api/decks/{other_deck.id}/cards/{deck.cards[0].id}')
    assert response.status_code == 404


def test_delete_all_cards(client, free_user):
    deck = make_deck(free_user, cards=4)
    login(client, free_user.user_id)

    payload = client.delete(f'/api/decks/{deck.id}/cards').get_json()

    assert payload['data'] == {'deleted': 4}
    assert Card.query.filter_by(deck_id=deck.id).count() == 0
