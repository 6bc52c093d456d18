from .card_generator import FlashcardGenerator, classify_generation_error, generate_cards_for_deck

__all__ = ['FlashcardGenerator', 'classify_generation_error', 'generate_cards_for_deck']
