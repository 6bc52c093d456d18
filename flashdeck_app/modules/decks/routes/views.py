# File: flashdeck_app/modules/decks/routes/views.py
# HTML pages: dashboard and deck detail. Outcomes are reported as flashed toasts.

from flask import abort, current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required
from marshmallow import ValidationError

from flashdeck_app.core.error_handlers import NotFoundError
from flashdeck_app.modules.access_control.exceptions import QuotaExceededError
from flashdeck_app.modules.access_control.interface import AccessControlInterface
from flashdeck_app.modules.access_control.logics.policies import LIMIT_DECKS, PolicyValues
from .. import decks_bp
from ..schemas import CardSchema, CreateDeckSchema, UpdateDeckSchema
from ..services import CardService, DeckService
from .api import enforce_deck_quota, get_owned_card


def _first_error(error: ValidationError) -> str:
    """Flatten marshmallow's error dict to the first message."""
    for messages in error.messages.values():
        if isinstance(messages, list) and messages:
            return messages[0]
        return str(messages)
    return 'Invalid input.'


@decks_bp.route('/')
def index():
    if current_user.is_authenticated:
        return redirect(url_for('decks.dashboard'))
    return redirect(url_for('auth.login'))


@decks_bp.route('/dashboard')
@login_required
def dashboard():
    decks = DeckService.get_user_decks(current_user.user_id)
    deck_limit = AccessControlInterface.get_limit(current_user, LIMIT_DECKS)
    return render_template(
        'decks/dashboard.html',
        decks=decks,
        deck_limit=None if deck_limit == PolicyValues.UNLIMITED else int(deck_limit),
        total_cards=sum(len(deck.cards) for deck in decks),
    )


@decks_bp.route('/decks', methods=['POST'])
@login_required
def create_deck():
    try:
        data = CreateDeckSchema().load(request.form)
        enforce_deck_quota(current_user)
    except ValidationError as e:
        flash(_first_error(e), 'danger')
        return redirect(url_for('decks.dashboard'))
    except QuotaExceededError as e:
        flash(e.message, 'danger')
        return redirect(url_for('decks.dashboard'))

    deck = DeckService.create_deck(current_user.user_id, data['name'], data.get('description'))
    flash('Deck created successfully.', 'success')
    return redirect(url_for('decks.deck_detail', deck_id=deck.id))


@decks_bp.route('/decks/<int:deck_id>')
@login_required
def deck_detail(deck_id):
    deck = DeckService.get_deck_by_id(deck_id, current_user.user_id)
    if deck is None:
        abort(404)

    cards = CardService.get_cards_by_deck_id(deck_id, current_user.user_id)
    return render_template('decks/detail.html', deck=deck, cards=cards)


@decks_bp.route('/decks/<int:deck_id>/edit', methods=['POST'])
@login_required
def update_deck(deck_id):
    try:
        data = UpdateDeckSchema().load(request.form)
    except ValidationError as e:
        flash(_first_error(e), 'danger')
        return redirect(url_for('decks.deck_detail', deck_id=deck_id))

    if DeckService.update_deck(deck_id, current_user.user_id, **data) is None:
        flash("Deck not found or you don't have permission to update it.", 'danger')
        return redirect(url_for('decks.dashboard'))

    flash('Deck updated successfully.', 'success')
    return redirect(url_for('decks.deck_detail', deck_id=deck_id))


@decks_bp.route('/decks/<int:deck_id>/delete', methods=['POST'])
@login_required
def delete_deck(deck_id):
    if DeckService.delete_deck(deck_id, current_user.user_id) is None:
        flash("Deck not found or you don't have permission to delete it.", 'danger')
    else:
        flash('Deck deleted successfully.', 'success')
    return redirect(url_for('decks.dashboard'))


@decks_bp.route('/decks/<int:deck_id>/cards', methods=['POST'])
@login_required
def create_card(deck_id):
    try:
        data = CardSchema().load(request.form)
        CardService.create_card(current_user.user_id, deck_id, data['front'], data['back'])
        flash('Card created successfully.', 'success')
    except ValidationError as e:
        flash(_first_error(e), 'danger')
    except NotFoundError:
        current_app.logger.warning(f"User {current_user.user_id} tried to add a card to deck {deck_id}")
        flash('Failed to create card.', 'danger')
    return redirect(url_for('decks.deck_detail', deck_id=deck_id))


@decks_bp.route('/decks/<int:deck_id>/cards/<int:card_id>/edit', methods=['POST'])
@login_required
def update_card(deck_id, card_id):
    try:
        data = CardSchema().load(request.form)
        get_owned_card(deck_id, card_id)
        CardService.update_card(card_id, current_user.user_id, **data)
        flash('Card updated successfully.', 'success')
    except ValidationError as e:
        flash(_first_error(e), 'danger')
    except NotFoundError:
        flash('Failed to update card.', 'danger')
    return redirect(url_for('decks.deck_detail', deck_id=deck_id))


@decks_bp.route('/decks/<int:deck_id>/cards/<int:card_id>/delete', methods=['POST'])
@login_required
def delete_card(deck_id, card_id):
    try:
        get_owned_card(deck_id, card_id)
        CardService.delete_card(card_id, current_user.user_id)
        flash('Card deleted successfully.', 'success')
    except NotFoundError:
        flash('Failed to delete card.', 'danger')
    return redirect(url_for('decks.deck_detail', deck_id=deck_id))
