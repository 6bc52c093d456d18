# File: flashdeck_app/modules/study/routes/views.py
from flask import abort, render_template
from flask_login import current_user, login_required

from flashdeck_app.modules.decks.services import DeckService
from .. import study_bp
from ..logics.session_machine import KEYBOARD_SHORTCUTS


@study_bp.route('/decks/<int:deck_id>/study')
@login_required
def study_page(deck_id):
    deck = DeckService.get_deck_by_id(deck_id, current_user.user_id)
    if deck is None:
        abort(404)
    return render_template('study/session.html', deck=deck, card_count=len(deck.cards), shortcuts=KEYBOARD_SHORTCUTS)
