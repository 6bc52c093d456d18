from marshmallow import EXCLUDE, Schema, fields, validate, pre_load

DECK_NAME_MAX = 100
DECK_DESCRIPTION_MAX = 500
CARD_SIDE_MAX = 1000


class _StripStrings(Schema):
    """Trim surrounding whitespace from incoming string fields."""

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def strip_strings(self, data, **kwargs):
        if not hasattr(data, 'items'):
            return data
        return {key: value.strip() if isinstance(value, str) else value for key, value in data.items()}


# --- Input Schemas ---

class CreateDeckSchema(_StripStrings):
    name = fields.Str(required=True, validate=[
        validate.Length(min=1, error="Deck name is required"),
        validate.Length(max=DECK_NAME_MAX, error=f"Deck name must be less than {DECK_NAME_MAX} characters"),
    ])
    description = fields.Str(load_default=None, allow_none=True, validate=validate.Length(
        max=DECK_DESCRIPTION_MAX, error=f"Description must be less than {DECK_DESCRIPTION_MAX} characters"))


class UpdateDeckSchema(_StripStrings):
    name = fields.Str(validate=[
        validate.Length(min=1, error="Deck name is required"),
        validate.Length(max=DECK_NAME_MAX, error=f"Deck name must be less than {DECK_NAME_MAX} characters"),
    ])
    description = fields.Str(allow_none=True, validate=validate.Length(
        max=DECK_DESCRIPTION_MAX, error=f"Description must be less than {DECK_DESCRIPTION_MAX} characters"))


class CardSchema(_StripStrings):
    front = fields.Str(required=True, validate=[
        validate.Length(min=1, error="Front side is required"),
        validate.Length(max=CARD_SIDE_MAX, error="Front side is too long"),
    ])
    back = fields.Str(required=True, validate=[
        validate.Length(min=1, error="Back side is required"),
        validate.Length(max=CARD_SIDE_MAX, error="Back side is too long"),
    ])


class GenerateCardsSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    count = fields.Int(load_default=20, validate=validate.Range(min=1, max=20))


# --- Output Schemas ---

class CardOutputSchema(Schema):
    id = fields.Int()
    deck_id = fields.Int()
    front = fields.Str()
    back = fields.Str()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
    deck_name = fields.Method('get_deck_name')

    def get_deck_name(self, card):
        return card.deck.name if card.deck else None


class DeckOutputSchema(Schema):
    id = fields.Int()
    name = fields.Str()
    description = fields.Str(allow_none=True)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
    card_count = fields.Method('get_card_count')

    def get_card_count(self, deck):
        return len(deck.cards)
