"""
Central Signal Registry for Event-Driven Architecture.

Uses blinker namespaces so modules can react to each other's events
without importing each other.

Usage:
    # Publisher (sender)
    from flashdeck_app.core.signals import session_completed
    session_completed.send(None, user_id=1, deck_id=2, ...)

    # Subscriber (receiver)
    @session_completed.connect
    def on_session_completed(sender, **kwargs):
        ...
"""
from blinker import Namespace

# ============================================
# Content Management Signals
# ============================================
content_signals = Namespace()

# Signal: Fired when a deck or card is created
# Payload: user_id, content_type ('deck', 'card'), content_id, deck_id
content_created = content_signals.signal('content_created')

# Signal: Fired when a deck or card is deleted
# Payload: user_id, content_type ('deck', 'card', 'deck_cards'), content_id, deck_id
content_deleted = content_signals.signal('content_deleted')

# ============================================
# Study Signals
# ============================================
study_signals = Namespace()

# Signal: Fired when the last card of a study session is answered
# Payload: user_id, deck_id, mode, total_answered, correct_count, accuracy
session_completed = study_signals.signal('session_completed')

# ============================================
# AI Services Signals
# ============================================
ai_signals = Namespace()

# Signal: Fired after AI generated cards were saved to a deck
# Payload: user_id, deck_id, content_type, requested, saved, failed
cards_generated = ai_signals.signal('cards_generated')
