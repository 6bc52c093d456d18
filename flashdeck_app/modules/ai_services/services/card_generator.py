"""
AI flashcard generation.

``FlashcardGenerator`` builds the prompt, calls Gemini and validates the
result. ``generate_cards_for_deck`` is the user-facing action: it checks the
plan, reads the deck and saves what came back.
"""

import logging

from google.api_core import exceptions as google_exceptions
from flask import current_app

from flashdeck_app.core.error_handlers import NotFoundError, ValidationError
from flashdeck_app.core.signals import cards_generated
from flashdeck_app.db_instance import db
from flashdeck_app.modules.access_control.interface import AccessControlInterface
from flashdeck_app.modules.access_control.logics.policies import FEATURE_AI_FLASHCARD_GENERATION, LIMIT_AI_CARDS_PER_REQUEST
from flashdeck_app.modules.decks.services import CardService, DeckService
from ..engines.gemini_client import get_gemini_client
from ..exceptions import (
    AIConfigurationError,
    AIContentBlockedError,
    AIGenerationError,
    REASON_CONFIGURATION,
    REASON_CONTENT_POLICY,
    REASON_QUOTA,
    REASON_RATE_LIMIT,
    REASON_SAVE_FAILED,
    REASON_UNKNOWN,
)
from ..logics.prompts import build_prompt, detect_content_type
from ..logics.response_parser import FLASHCARD_RESPONSE_SCHEMA, ResponseParser

logger = logging.getLogger(__name__)

DEFAULT_CARD_COUNT = 20

GENERATION_MESSAGES = {
    REASON_QUOTA: "AI service quota exceeded. Please try again later or contact support.",
    REASON_RATE_LIMIT: "AI service is temporarily unavailable due to high demand. Please try again in a few minutes.",
    REASON_CONTENT_POLICY: "Unable to generate content for this topic. Please try a different subject.",
    REASON_CONFIGURATION: "AI service configuration error. Please contact support.",
    REASON_UNKNOWN: "Failed to generate flashcards. Please try again later.",
}

# Only the quota text is reworded for the deck page; other reasons keep the
# generator's message
ACTION_MESSAGES = {
    REASON_QUOTA: "AI generation is temporarily unavailable due to service limits. Please try again later.",
}

PRO_REQUIRED_MESSAGE = "AI flashcard generation requires a Pro subscription."
DESCRIPTION_REQUIRED_MESSAGE = (
    "Deck description is required for AI generation. "
    "Please add a description to help create more relevant flashcards."
)
SAVE_FAILED_MESSAGE = "Failed to save any generated cards. Please try again."


def classify_generation_error(error):
    """Map a provider or parsing failure to an AIGenerationError reason."""
    text = str(error).lower()

    if 'quota' in text or 'insufficient_quota' in text:
        return REASON_QUOTA
    if isinstance(error, (google_exceptions.ResourceExhausted, google_exceptions.TooManyRequests)) or 'rate limit' in text:
        return REASON_RATE_LIMIT
    if isinstance(error, AIContentBlockedError) or 'content policy' in text:
        return REASON_CONTENT_POLICY
    if isinstance(error, (AIConfigurationError, google_exceptions.PermissionDenied, google_exceptions.Unauthenticated)):
        return REASON_CONFIGURATION
    if 'authentication' in text or 'api key' in text:
        return REASON_CONFIGURATION
    return REASON_UNKNOWN


class FlashcardGenerator:
    """Generates flashcards for a topic with Gemini."""

    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = get_gemini_client()
        return self._client

    def generate_flashcards(self, topic, description=None, count=DEFAULT_CARD_COUNT):
        """
        Return up to ``count`` ``{front, back}`` dicts for ``topic``.

        Raises:
            AIGenerationError: with a message fit for the user.
        """
        content_type = detect_content_type(topic, description or '')
        prompt = build_prompt(topic, description or '', count, content_type)
        logger.info(f"Generating {count} '{content_type}' flashcards for '{topic}'")

        try:
            raw = self.client.generate_content(prompt, response_schema=FLASHCARD_RESPONSE_SCHEMA)
            flashcards = ResponseParser.parse_flashcards(raw)
            if len(flashcards) < min(count, 1):
                raise ValueError("Generated insufficient flashcards")
        except Exception as e:
            reason = classify_generation_error(e)
            logger.error(f"Flashcard generation failed ({reason}): {e}")
            raise AIGenerationError(GENERATION_MESSAGES[reason], reason=reason) from e

        return flashcards[:count]


def generate_cards_for_deck(user, deck_id, count=None, generator=None):
    """
    Generate cards with AI and add them to one of ``user``'s decks.

    The deck name is the topic and its description the context, so the deck
    must have a description. Cards that fail to save are counted, not fatal.

    Returns:
        dict: ``success``, ``cards`` (saved Card objects), ``saved``, ``failed``, ``message``.

    Raises:
        PermissionDeniedError: the user's plan lacks AI generation.
        NotFoundError: the deck does not exist or is not the user's.
        ValidationError: the deck has no description.
        AIGenerationError: generation failed or nothing could be saved.
    """
    AccessControlInterface.require(user, FEATURE_AI_FLASHCARD_GENERATION, message=PRO_REQUIRED_MESSAGE)

    deck = DeckService.get_deck_by_id(deck_id, user.user_id)
    if deck is None:
        raise NotFoundError("Deck not found or you don't have permission to access it.", resource='deck')
    if not (deck.description or '').strip():
        raise ValidationError(DESCRIPTION_REQUIRED_MESSAGE)

    count = count or current_app.config.get('AI_DEFAULT_CARD_COUNT', DEFAULT_CARD_COUNT)
    count = int(min(count, AccessControlInterface.get_limit(user, LIMIT_AI_CARDS_PER_REQUEST)))
    generator = generator or FlashcardGenerator()

    try:
        flashcards = generator.generate_flashcards(deck.name, deck.description, count)
    except AIGenerationError as e:
        message = ACTION_MESSAGES.get(e.reason, e.message)
        raise AIGenerationError(message, reason=e.reason) from e

    saved, failed = [], 0
    for card in flashcards:
        try:
            saved.append(CardService.create_card(user.user_id, deck.id, card['front'], card['back']))
        except Exception as e:
            db.session.rollback()
            logger.error(f"Failed to save generated card for deck {deck.id}: {e}")
            failed += 1

    if not saved:
        raise AIGenerationError(SAVE_FAILED_MESSAGE, reason=REASON_SAVE_FAILED)

    cards_generated.send(
        None,
        user_id=user.user_id,
        deck_id=deck.id,
        content_type=detect_content_type(deck.name, deck.description),
        requested=count,
        saved=len(saved),
        failed=failed,
    )

    if failed:
        message = f"Generated {len(saved)} cards successfully. {failed} cards failed to save."
    else:
        message = f"Successfully generated {len(saved)} cards using AI!"
    logger.info(f"User {user.user_id} generated {len(saved)} cards for deck {deck.id} ({failed} failed)")

    return {'success': True, 'cards': saved, 'saved': len(saved), 'failed': failed, 'message': message}
