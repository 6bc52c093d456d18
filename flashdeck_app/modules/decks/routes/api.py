# File: flashdeck_app/modules/decks/routes/api.py
# JSON API for decks and cards. Mounted at /api/decks.

from flask import jsonify, request
from flask_login import current_user, login_required

from flashdeck_app.core.error_handlers import NotFoundError, success_response
from flashdeck_app.modules.access_control.interface import AccessControlInterface
from flashdeck_app.modules.access_control.logics.policies import FEATURE_UNLIMITED_DECKS, LIMIT_DECKS
from .. import decks_api_bp
from ..schemas import CardOutputSchema, CardSchema, CreateDeckSchema, DeckOutputSchema, UpdateDeckSchema
from ..services import CardService, DeckService

deck_schema = DeckOutputSchema()
decks_schema = DeckOutputSchema(many=True)
card_schema = CardOutputSchema()
cards_schema = CardOutputSchema(many=True)


def _payload():
    return request.get_json(silent=True) or {}


def _get_owned_deck(deck_id):
    deck = DeckService.get_deck_by_id(deck_id, current_user.user_id)
    if deck is None:
        raise NotFoundError("Deck not found or you don't have permission to access it.", resource='deck')
    return deck


def get_owned_card(deck_id, card_id):
    card = CardService.get_card_by_id(card_id, current_user.user_id)
    if card is None or card.deck_id != deck_id:
        raise NotFoundError("Card not found", resource='card')
    return card


def enforce_deck_quota(user):
    """Free plans may only own a limited number of decks."""
    if AccessControlInterface.check(user, FEATURE_UNLIMITED_DECKS):
        return
    limit = AccessControlInterface.get_limit(user, LIMIT_DECKS)
    AccessControlInterface.enforce_quota(
        user,
        LIMIT_DECKS,
        DeckService.count_user_decks(user.user_id),
        message=f"Free users are limited to {int(limit)} decks. Upgrade to Pro for unlimited decks.",
    )


@decks_api_bp.route('', methods=['GET'])
@login_required
def list_decks():
    decks = DeckService.get_user_decks(current_user.user_id)
    return jsonify(success_response(decks_schema.dump(decks)))


@decks_api_bp.route('', methods=['POST'])
@login_required
def create_deck():
    data = CreateDeckSchema().load(_payload())
    enforce_deck_quota(current_user)

    deck = DeckService.create_deck(current_user.user_id, data['name'], data.get('description'))
    return jsonify(success_response(deck_schema.dump(deck), 'Deck created successfully')), 201


@decks_api_bp.route('/<int:deck_id>', methods=['GET'])
@login_required
def get_deck(deck_id):
    result = DeckService.get_deck_with_cards(deck_id, current_user.user_id)
    if result is None:
        raise NotFoundError("Deck not found or you don't have permission to access it.", resource='deck')

    data = deck_schema.dump(result['deck'])
    data['cards'] = cards_schema.dump(result['cards'])
    return jsonify(success_response(data))


@decks_api_bp.route('/<int:deck_id>', methods=['PATCH', 'PUT'])
@login_required
def update_deck(deck_id):
    data = UpdateDeckSchema().load(_payload())

    deck = DeckService.update_deck(deck_id, current_user.user_id, **data)
    if deck is None:
        raise NotFoundError("Deck not found or you don't have permission to update it.", resource='deck')
    return jsonify(success_response(deck_schema.dump(deck), 'Deck updated successfully'))


@decks_api_bp.route('/<int:deck_id>', methods=['DELETE'])
@login_required
def delete_deck(deck_id):
    deck = DeckService.delete_deck(deck_id, current_user.user_id)
    if deck is None:
        raise NotFoundError("Deck not found or you don't have permission to delete it.", resource='deck')
    return jsonify(success_response(deck.to_dict(), 'Deck deleted successfully'))


@decks_api_bp.route('/<int:deck_id>/cards', methods=['GET'])
@login_required
def list_cards(deck_id):
    _get_owned_deck(deck_id)
    cards = CardService.get_cards_by_deck_id(deck_id, current_user.user_id)
    return jsonify(success_response(cards_schema.dump(cards)))


@decks_api_bp.route('/<int:deck_id>/cards', methods=['POST'])
@login_required
def create_card(deck_id):
    data = CardSchema().load(_payload())
    card = CardService.create_card(current_user.user_id, deck_id, data['front'], data['back'])
    return jsonify(success_response(card_schema.dump(card), 'Card created successfully')), 201


@decks_api_bp.route('/<int:deck_id>/cards', methods=['DELETE'])
@login_required
def delete_all_cards(deck_id):
    deleted = CardService.delete_cards_by_deck_id(deck_id, current_user.user_id)
    return jsonify(success_response({'deleted': deleted}, f'Deleted {deleted} cards'))


@decks_api_bp.route('/<int:deck_id>/cards/<int:card_id>', methods=['GET'])
@login_required
def get_card(deck_id, card_id):
    card = get_owned_card(deck_id, card_id)
    return jsonify(success_response(card_schema.dump(card)))


@decks_api_bp.route('/<int:deck_id>/cards/<int:card_id>', methods=['PATCH', 'PUT'])
@login_required
def update_card(deck_id, card_id):
    data = CardSchema().load(_payload())
    get_owned_card(deck_id, card_id)

    card = CardService.update_card(card_id, current_user.user_id, **data)
    return jsonify(success_response(card_schema.dump(card), 'Card updated successfully'))


@decks_api_bp.route('/<int:deck_id>/cards/<int:card_id>', methods=['DELETE'])
@login_required
def delete_card(deck_id, card_id):
    get_owned_card(deck_id, card_id)
    card = CardService.delete_card(card_id, current_user.user_id)
    return jsonify(success_response(card.to_dict(), 'Card deleted successfully'))
