"""
Study Session Service - keeps one study session per user and deck in the database.

Only card ids and results are stored. Card text is reloaded from the
database on every request, so edits show up mid-session and deleted cards
drop out.
"""
from __future__ import annotations

from dataclasses import asdict
from typing import Callable, Optional

from flask import current_app

from flashdeck_app.core.error_handlers import NotFoundError
from flashdeck_app.core.signals import session_completed
from flashdeck_app.db_instance import db
from flashdeck_app.models import StudySessionState
from flashdeck_app.modules.decks.services import DeckService
from ..logics.session_machine import StudyCard, StudySession


class StudySessionService:
    """Load, mutate and save the study session of a user's deck."""

    def __init__(self, user_id: int, deck_id: int):
        self.user_id = user_id
        self.deck_id = deck_id
        deck_data = DeckService.get_deck_with_cards(deck_id, user_id)
        if deck_data is None:
            raise NotFoundError("Deck not found or you don't have permission to access it.", resource='deck')
        self.deck = deck_data['deck']
        self.cards = deck_data['cards']

    # --- persistence -------------------------------------------------------

    def _record(self) -> Optional[StudySessionState]:
        return StudySessionState.query.filter_by(user_id=self.user_id, deck_id=self.deck_id).first()

    def load(self) -> StudySession:
        record = self._record()
        raw = record.state if record else None
        if not raw:
            return StudySession()

        by_id = {card.id: StudyCard.from_card(card) for card in self.cards}
        data = dict(raw)
        data['study_cards'] = [asdict(by_id[card_id]) for card_id in raw.get('study_cards', []) if card_id in by_id]
        study = StudySession.from_dict(data)

        if study.session_started and not study.study_cards:
            study.reset()
        elif study.current_index >= len(study.study_cards):
            study.current_index = max(len(study.study_cards) - 1, 0)
        return study

    def save(self, study: StudySession) -> None:
        data = study.to_dict()
        data['study_cards'] = [card['id'] for card in data['study_cards']]

        record = self._record()
        if record is None:
            record = StudySessionState(user_id=self.user_id, deck_id=self.deck_id)
            db.session.add(record)
        record.state = data
        db.session.commit()

    def clear(self) -> None:
        record = self._record()
        if record is not None:
            db.session.delete(record)
            db.session.commit()

    # --- operations --------------------------------------------------------

    def start(self, mode: str) -> StudySession:
        study = self.load()
        study.start(self.cards, mode)
        self.save(study)
        current_app.logger.info(
            f"Study session started: deck {self.deck_id}, user {self.user_id}, "
            f"mode {study.mode}, {len(study.study_cards)} cards"
        )
        return study

    def apply(self, operation: Callable[[StudySession], Optional[str]]) -> tuple[StudySession, Optional[str]]:
        """
        Run ``operation`` against the stored session and save the result.

        Emits ``session_completed`` when the operation finishes the session.
        """
        study = self.load()
        was_complete = study.session_complete
        outcome = operation(study)
        self.save(study)

        if study.session_complete and not was_complete:
            current_app.logger.info(
                f"Study session completed: deck {self.deck_id}, user {self.user_id}, "
                f"{study.correct_count}/{study.total_answered} correct"
            )
            session_completed.send(
                None,
                user_id=self.user_id,
                deck_id=self.deck_id,
                mode=study.mode,
                total_answered=study.total_answered,
                correct_count=study.correct_count,
                accuracy=study.accuracy,
            )
        return study, outcome

    def reset(self) -> StudySession:
        study = StudySession()
        self.clear()
        return study
