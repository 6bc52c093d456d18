"""Database models for Flashdeck."""

from ..db_instance import db
from .user import User
from .deck import Card, Deck
from .study_session import StudySessionState

__all__ = ["db", "User", "Deck", "Card", "StudySessionState"]
