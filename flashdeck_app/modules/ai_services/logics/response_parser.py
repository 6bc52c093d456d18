# File: flashdeck_app/modules/ai_services/logics/response_parser.py
# Turns raw model output into validated flashcards.

import json
import logging
import re

from marshmallow import EXCLUDE, Schema, ValidationError, fields, pre_load, validate

from flashdeck_app.modules.decks.schemas import CARD_SIDE_MAX

logger = logging.getLogger(__name__)

# Schema handed to Gemini so it answers with {"flashcards": [{"front", "back"}]}
FLASHCARD_RESPONSE_SCHEMA = {
    'type': 'OBJECT',
    'properties': {
        'flashcards': {
            'type': 'ARRAY',
            'items': {
                'type': 'OBJECT',
                'properties': {
                    'front': {'type': 'STRING'},
                    'back': {'type': 'STRING'},
                },
                'required': ['front', 'back'],
            },
        },
    },
    'required': ['flashcards'],
}


class FlashcardSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    front = fields.String(required=True, validate=validate.Length(min=1, max=CARD_SIDE_MAX))
    back = fields.String(required=True, validate=validate.Length(min=1, max=CARD_SIDE_MAX))

    @pre_load
    def strip_sides(self, data, **kwargs):
        if isinstance(data, dict):
            return {k: v.strip() if isinstance(v, str) else v for k, v in data.items()}
        return data


class FlashcardArraySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    flashcards = fields.List(fields.Dict(), required=True, validate=validate.Length(min=1))


class ResponseParser:
    """Utilities for parsing model responses."""

    _FENCE_RE = re.compile(r'^```(?:json)?\s*|\s*```$', re.IGNORECASE)

    @staticmethod
    def clean_markdown(text: str) -> str:
        """Strip surrounding markdown code fences."""
        if not text:
            return ''
        return ResponseParser._FENCE_RE.sub('', text.strip()).strip()

    @staticmethod
    def extract_json(text: str):
        """
        Decode the JSON payload of a response.

        Falls back to the outermost ``{...}`` block when the model wrapped
        the JSON in prose. Raises ValueError when nothing decodes.
        """
        clean = ResponseParser.clean_markdown(text)
        try:
            return json.loads(clean)
        except json.JSONDecodeError:
            start, end = clean.find('{'), clean.rfind('}')
            if start == -1 or end <= start:
                raise ValueError('Response did not contain JSON')
            try:
                return json.loads(clean[start:end + 1])
            except json.JSONDecodeError as exc:
                raise ValueError(f'Response did not contain valid JSON: {exc}') from exc

    @staticmethod
    def parse_flashcards(text: str) -> list[dict]:
        """
        Return the valid ``{front, back}`` pairs of a response.

        Individual cards with a blank or oversized side are skipped. Raises
        ValueError when the response has no flashcard list at all.
        """
        payload = ResponseParser.extract_json(text)
        if isinstance(payload, list):
            payload = {'flashcards': payload}

        try:
            raw_cards = FlashcardArraySchema().load(payload)['flashcards']
        except ValidationError as exc:
            raise ValueError(f'Malformed flashcard response: {exc.messages}') from exc

        card_schema = FlashcardSchema()
        flashcards = []
        for raw in raw_cards:
            try:
                flashcards.append(card_schema.load(raw))
            except ValidationError as exc:
                logger.warning(f"Skipping invalid generated card: {exc.messages}")
        return flashcards
