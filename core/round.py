"""Drill round state machine."""

import logging

from .config import (
    DEFAULT_DIRECTION, REQUIRED_CORRECT_PER_ROUND,
    WRITTEN, MULTIPLE_CHOICE
)
from .errors import FileError, PreconditionError, RoundStateError
from .interfaces import Presenter, RandomSource, Storage
from .models import Dataset, WordPair
from .questions import Question, answer_field, build_options, can_build_options, make_prompt
from .utils import StdRandomSource, answers_match, format_accuracy

logger = logging.getLogger(__name__)


def build_report(dataset: Dataset) -> str:
    """Accuracy of every word in the dataset, one line per word."""
    lines = ['Accuracy report:']
    for pair in dataset:
        lines.append(f"{pair.term}: {format_accuracy(dataset.accuracy.accuracy_of(pair.term))}")
    return '\n'.join(lines)


class DrillRound:
    """Drills a selection of words until each has been answered correctly
    REQUIRED_CORRECT_PER_ROUND times.

    States:
        idle                 no round running
        in_round             asking questions, pool not empty
        awaiting_correction  a written answer was wrong, the user has to retype
                             the correct answer before the next question
        complete             pool emptied, report shown and dataset persisted

    The round pushes prompts to the Presenter and waits for the shell to call
    one of the submit_* methods.
    """

    IDLE = 'idle'
    IN_ROUND = 'in_round'
    AWAITING_CORRECTION = 'awaiting_correction'
    COMPLETE = 'complete'

    def __init__(self, dataset: Dataset, presenter: Presenter, rng: RandomSource = None,
                 storage: Storage = None, destination: str = None,
                 direction: str = DEFAULT_DIRECTION,
                 required_correct: int = REQUIRED_CORRECT_PER_ROUND):
        self.dataset = dataset
        self.presenter = presenter
        self.rng = rng or StdRandomSource()
        self.storage = storage
        self.destination = destination
        self.direction = direction
        self.required_correct = required_correct
        self.state = self.IDLE
        self.pool = []
        self.round_correct_count = {}
        self.last_asked_term = None
        self.current = None
        self.report = None
        self.saved = False

    @property
    def active(self) -> bool:
        return self.state in (self.IN_ROUND, self.AWAITING_CORRECTION)

    def start(self, selection: list[WordPair]) -> None:
        if self.active:
            raise RoundStateError("A round is already in progress.")
        if not selection:
            raise PreconditionError("No words selected. Select words before starting a round.")

        # Copy of the selected terms, duplicates dropped
        self.pool = list(dict.fromkeys(pair.term for pair in selection))
        self.round_correct_count = {term: 0 for term in self.pool}
        self.last_asked_term = None
        self.current = None
        self.report = None
        self.saved = False
        self.state = self.IN_ROUND
        logger.info(f"Round started with {len(self.pool)} words: {', '.join(self.pool)}")

    def abandon(self) -> None:
        """Stop the round without persisting. Attempts already counted stay in memory."""
        if self.active:
            logger.info(f"Round abandoned with {len(self.pool)} words left")
        self.state = self.IDLE
        self.pool = []
        self.current = None

    def pick_term(self) -> str:
        """Draw a term from the pool, avoiding the previous one unless it is the only one left."""
        term = self.rng.choice(self.pool)
        while term == self.last_asked_term and len(self.pool) > 1:
            term = self.rng.choice(self.pool)
        self.last_asked_term = term
        return term

    def next_question(self) -> Question:
        """Get the pending question, or ask a new one."""
        if self.state != self.IN_ROUND:
            raise RoundStateError(f"Cannot ask a question while {self.state}.")
        if self.current is not None:
            return self.current

        term = self.pick_term()
        pair = self.dataset.get(term)
        field = answer_field(self.direction)
        expected = pair.field(field)
        prompt = make_prompt(pair, self.direction)

        # Flip for every question; small datasets fall back to written answers
        wants_choice = self.rng.coin_flip()
        if wants_choice and can_build_options(self.dataset, field):
            options = build_options(expected, self.dataset, field, self.rng)
            question = Question(term, prompt, expected, MULTIPLE_CHOICE, options)
        else:
            question = Question(term, prompt, expected, WRITTEN)

        self.current = question
        self.presenter.show_prompt(prompt)
        if question.is_multiple_choice:
            self.presenter.show_options(question.options)
        return question

    def _pending(self, modality: str) -> Question:
        if self.state != self.IN_ROUND or self.current is None:
            raise RoundStateError("No question is waiting for an answer.")
        if self.current.modality != modality:
            raise RoundStateError(
                f"The pending question expects a {self.current.modality} answer."
            )
        return self.current

    def submit_written_answer(self, answer: str | None) -> dict:
        """Score a free-text answer. None means the user cancelled (counts as wrong)."""
        question = self._pending(WRITTEN)
        correct = answers_match(answer, question.expected)
        result = self._score(question, answer, correct)
        if not correct:
            self.state = self.AWAITING_CORRECTION
            result['needs_correction'] = True
            self._prompt_correction(question)
        return result

    def submit_choice(self, choice: str) -> dict:
        question = self._pending(MULTIPLE_CHOICE)
        correct = answers_match(choice, question.expected)
        result = self._score(question, choice, correct)
        if not correct:
            self.current = None
            self.presenter.show_prompt(f"Incorrect. The correct answer was '{question.expected}'.")
        return result

    def submit_correction(self, text: str | None) -> dict:
        """Retype of the correct answer after a wrong written answer.
        Does not count as an attempt."""
        if self.state != self.AWAITING_CORRECTION:
            raise RoundStateError("No correction is pending.")
        question = self.current
        accepted = answers_match(text, question.expected)
        if accepted:
            self.current = None
            self.state = self.IN_ROUND
        else:
            self._prompt_correction(question)
        return {'accepted': accepted, 'expected': question.expected}

    def _prompt_correction(self, question: Question) -> None:
        self.presenter.show_prompt(
            f"Incorrect. The correct answer is '{question.expected}'. Type it to continue:"
        )

    def _score(self, question: Question, answer: str | None, correct: bool) -> dict:
        term = question.term
        self.dataset.accuracy.record_attempt(term, correct)

        removed = False
        if correct:
            self.current = None
            self.round_correct_count[term] += 1
            if self.round_correct_count[term] >= self.required_correct:
                self.pool.remove(term)
                removed = True
            self.presenter.show_prompt('Correct!')

        if not self.pool:
            self._complete()

        return {
            'term': term,
            'answer': answer,
            'correct': correct,
            'expected': question.expected,
            'needs_correction': False,
            'removed': removed,
            'remaining': len(self.pool),
            'complete': self.state == self.COMPLETE
        }

    def _complete(self) -> None:
        self.state = self.COMPLETE
        self.report = build_report(self.dataset)
        logger.info("Round complete")
        self.presenter.show_report(self.report)

        if self.storage is None:
            return
        try:
            self.storage.save_dataset(self.dataset, self.destination)
            self.saved = True
        except FileError as e:
            logger.warning(f"Could not persist dataset: {e}")
            self.presenter.notify_error(str(e))
