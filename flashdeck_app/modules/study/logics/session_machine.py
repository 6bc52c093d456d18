"""
Study session state machine.

Pure logic with no Flask or database access. A session walks linearly
through a snapshot of the deck's cards, the answer side can be shown or
hidden, and every answer is recorded as a correct/incorrect result. The whole
state round-trips through ``to_dict``/``from_dict`` so it can be stored
between requests.
"""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable, Optional

MODE_SEQUENTIAL = 'sequential'
MODE_RANDOM = 'random'
MODE_REVIEW = 'review'
STUDY_MODES = (MODE_SEQUENTIAL, MODE_RANDOM, MODE_REVIEW)

# Actions reported by StudySession.handle_key
ACTION_FLIP = 'flip'
ACTION_REVEAL = 'reveal'
ACTION_ANSWER_CORRECT = 'answer_correct'
ACTION_ANSWER_INCORRECT = 'answer_incorrect'
ACTION_PREVIOUS = 'previous'
ACTION_NEXT = 'next'
ACTION_SHOW_SHORTCUTS = 'show_shortcuts'
ACTION_EXIT = 'exit'

# Key names follow KeyboardEvent.key, lowercased
KEYBOARD_SHORTCUTS = (
    ('Space', 'Flip card'),
    ('Enter', 'Show answer'),
    ('1 / X', 'Mark incorrect'),
    ('2 / C', 'Mark correct'),
    ('← / →', 'Previous / next card'),
    ('Backspace', 'Previous card'),
    ('?', 'Show shortcuts'),
    ('Esc', 'Exit study'),
)


class StudySessionError(Exception):
    """Raised when an operation does not fit the current session state."""


@dataclass
class StudyCard:
    id: int
    front: str
    back: str

    @classmethod
    def from_card(cls, card) -> 'StudyCard':
        return cls(id=card.id, front=card.front, back=card.back)


@dataclass
class StudyResult:
    card_id: int
    correct: bool


@dataclass
class StudySession:
    mode: str = MODE_SEQUENTIAL
    session_started: bool = False
    session_complete: bool = False
    show_answer: bool = False
    show_shortcuts: bool = False
    current_index: int = 0
    study_cards: list[StudyCard] = field(default_factory=list)
    results: list[StudyResult] = field(default_factory=list)

    # --- lifecycle ---------------------------------------------------------

    def start(self, cards: Iterable[Any], mode: Optional[str] = None, rng: Optional[random.Random] = None) -> None:
        """
        Begin a new pass over ``cards`` (anything with id/front/back).

        ``review`` studies the cards answered incorrectly in the results
        currently held by this session, or every card when there are none.
        """
        mode = mode or self.mode
        if mode not in STUDY_MODES:
            raise StudySessionError(f"Unknown study mode: {mode}")

        deck_cards = [card if isinstance(card, StudyCard) else StudyCard.from_card(card) for card in cards]

        if mode == MODE_RANDOM:
            to_study = list(deck_cards)
            (rng or random).shuffle(to_study)
        elif mode == MODE_REVIEW:
            incorrect_ids = {r.card_id for r in self.results if not r.correct}
            to_study = [card for card in deck_cards if card.id in incorrect_ids] or list(deck_cards)
        else:
            to_study = list(deck_cards)

        if not to_study:
            raise StudySessionError("This deck has no cards to study.")

        self.mode = mode
        self.study_cards = to_study
        self.current_index = 0
        self.show_answer = False
        self.show_shortcuts = False
        self.results = []
        self.session_started = True
        self.session_complete = False

    def reset(self) -> None:
        self.session_started = False
        self.session_complete = False
        self.current_index = 0
        self.show_answer = False
        self.show_shortcuts = False
        self.results = []
        self.study_cards = []

    # --- card navigation ---------------------------------------------------

    @property
    def in_progress(self) -> bool:
        return self.session_started and not self.session_complete

    @property
    def current_card(self) -> Optional[StudyCard]:
        if not self.in_progress or not self.study_cards:
            return None
        return self.study_cards[self.current_index]

    @property
    def has_previous(self) -> bool:
        return self.current_index > 0

    @property
    def has_next(self) -> bool:
        return self.current_index + 1 < len(self.study_cards)

    def _require_in_progress(self) -> None:
        if not self.in_progress:
            raise StudySessionError("No study session in progress.")

    def answer(self, correct: bool) -> None:
        """Record the result for the current card and move on."""
        self._require_in_progress()
        self.results.append(StudyResult(card_id=self.current_card.id, correct=bool(correct)))

        if not self.has_next:
            self.session_complete = True
        else:
            self.current_index += 1
            self.show_answer = False

    def previous(self) -> bool:
        """Step back one card, dropping any result recorded for the card being left."""
        self._require_in_progress()
        if not self.has_previous:
            return False

        leaving_id = self.study_cards[self.current_index].id
        self.current_index -= 1
        self.show_answer = False
        self.results = [r for r in self.results if r.card_id != leaving_id]
        return True

    def next(self) -> bool:
        """Skip ahead without recording a result."""
        self._require_in_progress()
        if not self.has_next:
            return False

        self.current_index += 1
        self.show_answer = False
        return True

    def flip(self) -> None:
        self._require_in_progress()
        self.show_answer = not self.show_answer

    def reveal(self) -> None:
        self._require_in_progress()
        self.show_answer = True

    # --- keyboard ----------------------------------------------------------

    def handle_key(self, key: str) -> Optional[str]:
        """
        Apply a keyboard shortcut and return the name of the action taken.

        Keys are ``KeyboardEvent.key`` values, compared case-insensitively.
        Returns None when the key does nothing in the current state,
        including any key before the session starts or after it completes.
        ``exit`` changes no state; the caller navigates away.
        """
        if not self.in_progress or not key:
            return None

        key = key.lower()

        if key in (' ', 'space', 'spacebar'):
            self.flip()
            return ACTION_FLIP
        if key == 'enter':
            if not self.show_answer:
                self.reveal()
                return ACTION_REVEAL
            return None
        if key in ('1', 'x'):
            if self.show_answer:
                self.answer(False)
                return ACTION_ANSWER_INCORRECT
            return None
        if key in ('2', 'c'):
            if self.show_answer:
                self.answer(True)
                return ACTION_ANSWER_CORRECT
            return None
        if key == 'arrowleft':
            return ACTION_PREVIOUS if self.previous() else None
        if key == 'arrowright':
            return ACTION_NEXT if self.next() else None
        if key == 'backspace':
            if not self.show_answer and self.previous():
                return ACTION_PREVIOUS
            return None
        if key == '?':
            self.show_shortcuts = True
            return ACTION_SHOW_SHORTCUTS
        if key == 'escape':
            return ACTION_EXIT
        return None

    # --- statistics --------------------------------------------------------

    @property
    def correct_count(self) -> int:
        return sum(1 for r in self.results if r.correct)

    @property
    def total_answered(self) -> int:
        return len(self.results)

    @property
    def incorrect_count(self) -> int:
        return self.total_answered - self.correct_count

    @property
    def accuracy(self) -> int:
        if not self.total_answered:
            return 0
        return round(self.correct_count / self.total_answered * 100)

    @property
    def progress(self) -> float:
        if not self.session_started or not self.study_cards:
            return 0.0
        return (self.current_index + (0.5 if self.show_answer else 0)) / len(self.study_cards) * 100

    # --- serialisation -----------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'StudySession':
        if not data:
            return cls()
        return cls(
            mode=data.get('mode', MODE_SEQUENTIAL),
            session_started=data.get('session_started', False),
            session_complete=data.get('session_complete', False),
            show_answer=data.get('show_answer', False),
            show_shortcuts=data.get('show_shortcuts', False),
            current_index=data.get('current_index', 0),
            study_cards=[StudyCard(**c) for c in data.get('study_cards', [])],
            results=[StudyResult(**r) for r in data.get('results', [])],
        )

    def snapshot(self) -> dict[str, Any]:
        """State plus derived values, as sent to the study page."""
        card = self.current_card
        return {
            'mode': self.mode,
            'session_started': self.session_started,
            'session_complete': self.session_complete,
            'show_answer': self.show_answer,
            'show_shortcuts': self.show_shortcuts,
            'current_index': self.current_index,
            'total_cards': len(self.study_cards),
            'current_card': asdict(card) if card else None,
            'has_previous': self.in_progress and self.has_previous,
            'has_next': self.in_progress and self.has_next,
            'correct_count': self.correct_count,
            'incorrect_count': self.incorrect_count,
            'total_answered': self.total_answered,
            'accuracy': self.accuracy,
            'progress': self.progress,
        }
