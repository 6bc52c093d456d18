from .deck_service import DeckService
from .card_service import CardService

__all__ = ['DeckService', 'CardService']
