"""Drill session: the object a presentation shell drives."""

import logging

from .config import (
    DEFAULT_DATASET_FILE, DEFAULT_DIRECTION, DEFAULT_SELECTION_SIZE, DIRECTIONS,
    SELECTION_PRESETS
)
from .errors import FileError, PreconditionError
from .interfaces import Presenter, RandomSource, Storage
from .models import Dataset, WordPair
from .questions import Question
from .round import DrillRound, build_report
from .selection import select_weakest
from .utils import StdRandomSource

logger = logging.getLogger(__name__)


def parse_selection_size(value) -> int:
    """Selection size from a config value, falling back to the default."""
    if value is None:
        return DEFAULT_SELECTION_SIZE
    if isinstance(value, str) and value.lower() in SELECTION_PRESETS:
        return SELECTION_PRESETS[value.lower()]
    try:
        size = int(value)
    except (TypeError, ValueError):
        size = 0
    if size <= 0:
        logger.warning(f"Invalid selection_size {value!r} in config, using {DEFAULT_SELECTION_SIZE}")
        return DEFAULT_SELECTION_SIZE
    return size


def parse_direction(value) -> str:
    if value is None:
        return DEFAULT_DIRECTION
    if value not in DIRECTIONS:
        logger.warning(f"Invalid direction {value!r} in config, using {DEFAULT_DIRECTION}")
        return DEFAULT_DIRECTION
    return value


class DrillSession:
    """Threads one Dataset through selection and drill rounds.

    User-facing failures (missing file, nothing selected) are reported through
    Presenter.notify_error and leave the session as it was.
    """

    def __init__(self, storage: Storage, presenter: Presenter, rng: RandomSource = None,
                 source: str = None, selection_size: int = DEFAULT_SELECTION_SIZE,
                 direction: str = DEFAULT_DIRECTION):
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown direction: {direction}")
        self.storage = storage
        self.presenter = presenter
        self.rng = rng or StdRandomSource()
        self.source = source or DEFAULT_DATASET_FILE
        self.selection_size = selection_size
        self.direction = direction
        self.dataset = Dataset()
        self.selection = []
        self.round = None

    @classmethod
    def from_config(cls, storage: Storage, presenter: Presenter, config: dict = None,
                    rng: RandomSource = None) -> 'DrillSession':
        """Build a session from a config dict (see Storage.load_config).

        `selection_size` is a positive int or a preset name ("basic", "extended").
        Invalid values are logged and replaced by the defaults.
        """
        config = config if config is not None else storage.load_config()
        return cls(
            storage, presenter, rng=rng,
            source=config.get('dataset_file'),
            selection_size=parse_selection_size(config.get('selection_size')),
            direction=parse_direction(config.get('direction'))
        )

    @property
    def in_round(self) -> bool:
        return self.round is not None and self.round.active

    def load(self, source: str = None) -> bool:
        """Load the dataset. On failure the current dataset is kept."""
        if self.in_round:
            self.presenter.notify_error("Finish or abandon the current round first.")
            return False
        source = source or self.source
        try:
            dataset = self.storage.load_dataset(source)
        except FileError as e:
            logger.error(f"Failed to load {source}: {e}")
            self.presenter.notify_error(str(e))
            return False

        self.dataset = dataset
        self.source = source
        self.selection = []
        self.round = None
        self.presenter.show_prompt(f"Loaded {len(dataset)} word pairs successfully!")
        return True

    def select(self, k: int = None) -> list[WordPair]:
        """Select the k weakest words for the next round."""
        if self.in_round:
            self.presenter.notify_error("Finish or abandon the current round first.")
            return self.selection
        if not len(self.dataset):
            self.selection = []
            self.presenter.notify_error("No words loaded.")
            return self.selection
        self.selection = select_weakest(self.dataset, self.selection_size if k is None else k)
        return self.selection

    def start_round(self) -> bool:
        if self.in_round:
            self.presenter.notify_error("A round is already in progress.")
            return False
        self.round = DrillRound(
            self.dataset, self.presenter, rng=self.rng, storage=self.storage,
            destination=self.source, direction=self.direction
        )
        try:
            self.round.start(self.selection)
        except PreconditionError as e:
            self.presenter.notify_error(str(e))
            return False
        return True

    def abandon_round(self) -> None:
        if self.round is not None:
            self.round.abandon()

    def _require_round(self) -> DrillRound:
        if self.round is None:
            raise PreconditionError("No round has been started.")
        return self.round

    def next_question(self) -> Question:
        return self._require_round().next_question()

    def submit_written_answer(self, answer: str | None) -> dict:
        return self._require_round().submit_written_answer(answer)

    def submit_choice(self, choice: str) -> dict:
        return self._require_round().submit_choice(choice)

    def submit_correction(self, text: str | None) -> dict:
        return self._require_round().submit_correction(text)

    def set_direction(self, direction: str) -> None:
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown direction: {direction}")
        if self.in_round:
            raise PreconditionError("Cannot change direction during a round.")
        self.direction = direction

    def report(self) -> str:
        return build_report(self.dataset)

    def word_stats(self) -> list[dict]:
        return self.dataset.word_stats()

    def get_status(self) -> dict:
        return {
            'source': self.source,
            'word_count': len(self.dataset),
            'selection': [pair.term for pair in self.selection],
            'selection_size': self.selection_size,
            'direction': self.direction,
            'state': self.round.state if self.round else DrillRound.IDLE,
            'pool': list(self.round.pool) if self.in_round else [],
            'round_correct_count': dict(self.round.round_correct_count) if self.round else {}
        }
