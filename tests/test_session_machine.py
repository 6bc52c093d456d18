import random
import unittest

from flashdeck_app.modules.study.logics.session_machine import (
    ACTION_ANSWER_CORRECT,
    ACTION_ANSWER_INCORRECT,
    ACTION_EXIT,
    ACTION_FLIP,
    ACTION_NEXT,
    ACTION_PREVIOUS,
    ACTION_REVEAL,
    ACTION_SHOW_SHORTCUTS,
    MODE_RANDOM,
    MODE_REVIEW,
    MODE_SEQUENTIAL,
    StudyCard,
    StudySession,
    StudySessionError,
)


def _cards(n=3):
    return [StudyCard(id=i, front=f'Q{i}', back=f'A{i}') for i in range(1, n + 1)]


class TestStudySessionLifecycle(unittest.TestCase):
    def test_initial_state(self):
        session = StudySession()
        self.assertFalse(session.session_started)
        self.assertIsNone(session.current_card)
        self.assertEqual(session.progress, 0.0)
        self.assertEqual(session.accuracy, 0)

    def test_start_sequential(self):
        session = StudySession()
        session.start(_cards(), MODE_SEQUENTIAL)

        self.assertTrue(session.in_progress)
        self.assertEqual([c.id for c in session.study_cards], [1, 2, 3])
        self.assertEqual(session.current_card.front, 'Q1')
        self.assertFalse(session.show_answer)

    def test_start_random_shuffles_a_copy(self):
        cards = _cards(10)
        session = StudySession()
        session.start(cards, MODE_RANDOM, rng=random.Random(4))

        self.assertEqual(sorted(c.id for c in session.study_cards), list(range(1, 11)))
        self.assertEqual([c.id for c in cards], list(range(1, 11)))

    def test_start_empty_deck(self):
        with self.assertRaisesRegex(StudySessionError, 'no cards to study'):
            StudySession().start([], MODE_SEQUENTIAL)

    def test_start_unknown_mode(self):
        with self.assertRaises(StudySessionError):
            StudySession().start(_cards(), 'cram')

    def test_reset(self):
        session = StudySession()
        session.start(_cards())
        session.flip()
        session.reset()

        self.assertFalse(session.session_started)
        self.assertEqual(session.study_cards, [])
        self.assertEqual(session.results, [])


class TestStudySessionAnswers(unittest.TestCase):
    def setUp(self):
        self.session = StudySession()
        self.session.start(_cards())

    def test_answer_advances_and_hides(self):
        self.session.reveal()
        self.session.answer(True)

        self.assertEqual(self.session.current_index, 1)
        self.assertFalse(self.session.show_answer)
        self.assertEqual(self.session.correct_count, 1)

    def test_last_answer_completes(self):
        for correct in (True, False, True):
            self.session.answer(correct)

        self.assertTrue(self.session.session_complete)
        self.assertFalse(self.session.in_progress)
        self.assertEqual(self.session.total_answered, 3)
        self.assertEqual(self.session.incorrect_count, 1)
        self.assertEqual(self.session.accuracy, 67)

    def test_actions_after_completion_fail(self):
        for _ in range(3):
            self.session.answer(True)

        with self.assertRaises(StudySessionError):
            self.session.flip()
        with self.assertRaises(StudySessionError):
            self.session.answer(True)

    def test_previous_drops_result_of_card_left(self):
        self.session.answer(True)   # card 1
        self.session.answer(False)  # card 2, now on card 3
        self.assertTrue(self.session.previous())

        self.assertEqual(self.session.current_card.id, 2)
        self.assertEqual([r.card_id for r in self.session.results], [1, 2])

        self.assertTrue(self.session.previous())
        self.assertEqual(self.session.current_card.id, 1)
        self.assertEqual([r.card_id for r in self.session.results], [1])

    def test_previous_at_start(self):
        self.assertFalse(self.session.previous())
        self.assertEqual(self.session.current_index, 0)

    def test_next_skips_without_result(self):
        self.assertTrue(self.session.next())
        self.assertTrue(self.session.next())
        self.assertFalse(self.session.next())
        self.assertEqual(self.session.results, [])

    def test_progress_counts_half_for_shown_answer(self):
        self.session.answer(True)
        self.session.reveal()
        self.assertAlmostEqual(self.session.progress, 1.5 / 3 * 100)

    def test_review_studies_incorrect_cards(self):
        self.session.answer(False)
        self.session.answer(True)
        self.session.answer(False)

        self.session.start(_cards(), MODE_REVIEW)

        self.assertEqual([c.id for c in self.session.study_cards], [1, 3])
        self.assertEqual(self.session.results, [])
        self.assertTrue(self.session.in_progress)

    def test_review_without_mistakes_studies_everything(self):
        for _ in range(3):
            self.session.answer(True)

        self.session.start(_cards(), MODE_REVIEW)
        self.assertEqual(len(self.session.study_cards), 3)


class TestKeyboardShortcuts(unittest.TestCase):
    def setUp(self):
        self.session = StudySession()
        self.session.start(_cards())

    def test_space_flips(self):
        self.assertEqual(self.session.handle_key(' '), ACTION_FLIP)
        self.assertTrue(self.session.show_answer)
        self.assertEqual(self.session.handle_key(' '), ACTION_FLIP)
        self.assertFalse(self.session.show_answer)

    def test_enter_only_reveals(self):
        self.assertEqual(self.session.handle_key('Enter'), ACTION_REVEAL)
        self.assertIsNone(self.session.handle_key('Enter'))
        self.assertTrue(self.session.show_answer)

    def test_answer_keys_need_shown_answer(self):
        self.assertIsNone(self.session.handle_key('2'))
        self.assertEqual(self.session.results, [])

        self.session.reveal()
        self.assertEqual(self.session.handle_key('c'), ACTION_ANSWER_CORRECT)
        self.session.reveal()
        self.assertEqual(self.session.handle_key('X'), ACTION_ANSWER_INCORRECT)
        self.assertEqual([r.correct for r in self.session.results], [True, False])

    def test_arrows_navigate(self):
        self.assertIsNone(self.session.handle_key('ArrowLeft'))
        self.assertEqual(self.session.handle_key('ArrowRight'), ACTION_NEXT)
        self.assertEqual(self.session.handle_key('ArrowLeft'), ACTION_PREVIOUS)

    def test_backspace_only_when_question_shown(self):
        self.session.next()
        self.session.reveal()
        self.assertIsNone(self.session.handle_key('Backspace'))

        self.session.flip()
        self.assertEqual(self.session.handle_key('Backspace'), ACTION_PREVIOUS)

    def test_help_and_exit(self):
        self.assertEqual(self.session.handle_key('?'), ACTION_SHOW_SHORTCUTS)
        self.assertTrue(self.session.show_shortcuts)
        self.assertEqual(self.session.handle_key('Escape'), ACTION_EXIT)
        self.assertTrue(self.session.in_progress)

    def test_keys_ignored_outside_session(self):
        idle = StudySession()
        self.assertIsNone(idle.handle_key(' '))
        self.assertIsNone(self.session.handle_key('q'))


class TestSerialisation(unittest.TestCase):
    def test_round_trip_keeps_progress(self):
        session = StudySession()
        session.start(_cards())
        session.answer(False)
        session.flip()

        restored = StudySession.from_dict(session.to_dict())

        self.assertEqual(restored.current_index, 1)
        self.assertTrue(restored.show_answer)
        self.assertEqual(restored.results[0].card_id, 1)
        self.assertEqual(restored.snapshot(), session.snapshot())

    def test_from_empty(self):
        self.assertFalse(StudySession.from_dict(None).session_started)


if __name__ == '__main__':
    unittest.main()
