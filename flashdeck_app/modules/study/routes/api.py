# File: flashdeck_app/modules/study/routes/api.py
# Study session API, mounted at /api/study/<deck_id>.

from flask import jsonify, request, url_for
from flask_login import current_user, login_required

from flashdeck_app.core.error_handlers import ValidationError, success_response
from .. import study_api_bp
from ..logics.session_machine import ACTION_EXIT, MODE_SEQUENTIAL, STUDY_MODES, StudySessionError
from ..services import StudySessionService


def _payload():
    return request.get_json(silent=True) or {}


def _state_response(service, study, action=None, message=None):
    data = study.snapshot()
    data['deck'] = {'id': service.deck.id, 'name': service.deck.name, 'card_count': len(service.cards)}
    if action:
        data['action'] = action
    if action == ACTION_EXIT:
        data['redirect'] = url_for('decks.deck_detail', deck_id=service.deck.id)
    return jsonify(success_response(data, message))


def _run(deck_id, operation, action=None):
    service = StudySessionService(current_user.user_id, deck_id)
    try:
        study, outcome = service.apply(operation)
    except StudySessionError as e:
        raise ValidationError(str(e))
    return _state_response(service, study, action or outcome)


@study_api_bp.route('/<int:deck_id>', methods=['GET'])
@login_required
def get_state(deck_id):
    service = StudySessionService(current_user.user_id, deck_id)
    return _state_response(service, service.load())


@study_api_bp.route('/<int:deck_id>/start', methods=['POST'])
@login_required
def start(deck_id):
    mode = _payload().get('mode', MODE_SEQUENTIAL)
    if mode not in STUDY_MODES:
        raise ValidationError('Invalid study mode', errors={'mode': [f"Must be one of: {', '.join(STUDY_MODES)}."]})

    service = StudySessionService(current_user.user_id, deck_id)
    try:
        study = service.start(mode)
    except StudySessionError as e:
        raise ValidationError(str(e))
    return _state_response(service, study, 'start')


@study_api_bp.route('/<int:deck_id>/flip', methods=['POST'])
@login_required
def flip(deck_id):
    return _run(deck_id, lambda s: s.flip(), 'flip')


@study_api_bp.route('/<int:deck_id>/reveal', methods=['POST'])
@login_required
def reveal(deck_id):
    return _run(deck_id, lambda s: s.reveal(), 'reveal')


@study_api_bp.route('/<int:deck_id>/answer', methods=['POST'])
@login_required
def answer(deck_id):
    correct = _payload().get('correct')
    if not isinstance(correct, bool):
        raise ValidationError('Invalid answer', errors={'correct': ['Must be true or false.']})
    return _run(deck_id, lambda s: s.answer(correct), 'answer_correct' if correct else 'answer_incorrect')


@study_api_bp.route('/<int:deck_id>/previous', methods=['POST'])
@login_required
def previous(deck_id):
    return _run(deck_id, lambda s: 'previous' if s.previous() else None)


@study_api_bp.route('/<int:deck_id>/next', methods=['POST'])
@login_required
def next_card(deck_id):
    return _run(deck_id, lambda s: 'next' if s.next() else None)


@study_api_bp.route('/<int:deck_id>/key', methods=['POST'])
@login_required
def key(deck_id):
    pressed = _payload().get('key')
    if not isinstance(pressed, str) or not pressed:
        raise ValidationError('Invalid key', errors={'key': ['Missing key.']})
    return _run(deck_id, lambda s: s.handle_key(pressed))


@study_api_bp.route('/<int:deck_id>/shortcuts', methods=['DELETE'])
@login_required
def hide_shortcuts(deck_id):
    def _hide(study):
        study.show_shortcuts = False

    service = StudySessionService(current_user.user_id, deck_id)
    study, _ = service.apply(_hide)
    return _state_response(service, study)


@study_api_bp.route('/<int:deck_id>/reset', methods=['POST'])
@login_required
def reset(deck_id):
    service = StudySessionService(current_user.user_id, deck_id)
    return _state_response(service, service.reset(), 'reset')
