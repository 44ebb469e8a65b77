"""Question building: prompts, answer fields and multiple-choice options."""

from .config import OPTION_COUNT, MULTIPLE_CHOICE
from .errors import PreconditionError
from .interfaces import RandomSource
from .models import Dataset, WordPair


class Question:
    """A single question of a drill round."""

    def __init__(self, term: str, prompt: str, expected: str, modality: str,
                 options: list[str] = None):
        self.term = term
        self.prompt = prompt
        self.expected = expected
        self.modality = modality
        self.options = options or []

    @property
    def is_multiple_choice(self) -> bool:
        return self.modality == MULTIPLE_CHOICE

    def to_dict(self) -> dict:
        # expected is left out so shells can't leak the answer
        return {
            'term': self.term,
            'prompt': self.prompt,
            'modality': self.modality,
            'options': list(self.options)
        }


def answer_field(direction: str) -> str:
    """Field the user has to produce: translation in normal mode, term in reverse."""
    return 'term' if direction == 'reverse' else 'translation'


def make_prompt(pair: WordPair, direction: str) -> str:
    if direction == 'reverse':
        return f"Which word means '{pair.translation}'?"
    return f"What is the translation of '{pair.term}'?"


def distinct_candidates(dataset: Dataset, field: str) -> set[str]:
    """Answer values that would not score as each other (compared case-insensitively)."""
    return {pair.field(field).lower() for pair in dataset}


def can_build_options(dataset: Dataset, field: str, count: int = OPTION_COUNT) -> bool:
    return len(distinct_candidates(dataset, field)) >= count


def build_options(correct_answer: str, dataset: Dataset, field: str, rng: RandomSource,
                  count: int = OPTION_COUNT) -> list[str]:
    """Build `count` distinct options containing correct_answer, shuffled.

    Distractors are drawn uniformly from the whole dataset. Raises
    PreconditionError when the dataset can't supply enough distinct values.
    """
    candidates = distinct_candidates(dataset, field)
    candidates.add(correct_answer.lower())
    if len(candidates) < count:
        raise PreconditionError(
            f"Need {count} distinct answers for multiple choice, dataset has {len(candidates)}"
        )

    options = [correct_answer]
    seen = {correct_answer.lower()}
    while len(options) < count:
        value = rng.choice(dataset.pairs).field(field)
        if value.lower() not in seen:
            seen.add(value.lower())
            options.append(value)
    rng.shuffle(options)
    return options
