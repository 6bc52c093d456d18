# File: flashdeck_app/modules/ai_services/routes.py
# AI card generation endpoint.

from flask import jsonify, request
from flask_login import current_user, login_required

from flashdeck_app.core.error_handlers import success_response
from flashdeck_app.modules.decks.schemas import CardOutputSchema, GenerateCardsSchema
from . import ai_services_bp
from .services import generate_cards_for_deck


@ai_services_bp.route('/api/decks/<int:deck_id>/generate', methods=['POST'])
@login_required
def generate_cards(deck_id):
    """Generate cards for a deck from its name and description. Pro plans only."""
    data = GenerateCardsSchema().load(request.get_json(silent=True) or {})
    result = generate_cards_for_deck(current_user, deck_id, data['count'])

    payload = {
        'cards': CardOutputSchema(many=True).dump(result['cards']),
        'saved': result['saved'],
        'failed': result['failed'],
    }
    return jsonify(success_response(payload, result['message'])), 201
