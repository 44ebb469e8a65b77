"""Domain models for vocab drill application."""

import logging
from typing import NamedTuple

logger = logging.getLogger(__name__)


class WordPair(NamedTuple):
    """A term and its translation. The term is the dataset key."""
    term: str
    translation: str

    def field(self, name: str) -> str:
        """Get 'term' or 'translation' by name."""
        return getattr(self, name)


class AccuracyRecord:
    """Correct/attempted counters for a single term."""

    def __init__(self, correct: int = 0, attempted: int = 0):
        if correct < 0 or attempted < 0 or correct > attempted:
            raise ValueError(f"Invalid accuracy counters: {correct}/{attempted}")
        self.correct = correct
        self.attempted = attempted

    @property
    def accuracy(self) -> float:
        if self.attempted == 0:
            return 0.0
        return self.correct / self.attempted

    def record(self, was_correct: bool) -> None:
        self.attempted += 1
        if was_correct:
            self.correct += 1

    def to_fraction(self) -> str:
        return f"{self.correct}/{self.attempted}"

    @classmethod
    def from_fraction(cls, text: str | None) -> 'AccuracyRecord':
        """Parse "<correct>/<attempted>". Anything unparseable gives a fresh record."""
        if not text or '/' not in text:
            return cls()
        correct, _, attempted = text.partition('/')
        try:
            return cls(int(correct.strip()), int(attempted.strip()))
        except ValueError:
            logger.debug(f"Malformed accuracy field {text!r}, using 0/0")
            return cls()

    def __eq__(self, other):
        if not isinstance(other, AccuracyRecord):
            return NotImplemented
        return (self.correct, self.attempted) == (other.correct, other.attempted)

    def __repr__(self):
        return f"AccuracyRecord({self.correct}/{self.attempted})"


class AccuracyModel:
    """Owns the term -> AccuracyRecord mapping."""

    def __init__(self, records: dict[str, AccuracyRecord] = None):
        self.records = dict(records or {})

    def __contains__(self, term: str) -> bool:
        return term in self.records

    def ensure(self, term: str) -> AccuracyRecord:
        """Get the record for term, creating an empty one if missing."""
        if term not in self.records:
            self.records[term] = AccuracyRecord()
        return self.records[term]

    def get(self, term: str) -> AccuracyRecord:
        return self.records[term]

    def record_attempt(self, term: str, was_correct: bool) -> None:
        """Count one attempt for an existing term. Unknown terms raise KeyError."""
        self.records[term].record(was_correct)

    def accuracy_of(self, term: str) -> float:
        return self.records[term].accuracy


class Dataset:
    """Ordered word pairs with one accuracy record per term."""

    def __init__(self, pairs: list[WordPair] = None, accuracy: AccuracyModel = None):
        self.pairs = []
        self.accuracy = accuracy or AccuracyModel()
        self._index = {}
        for pair in pairs or []:
            self.add(pair)

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self):
        return iter(self.pairs)

    def __contains__(self, term: str) -> bool:
        return term in self._index

    def add(self, pair: WordPair, record: AccuracyRecord = None) -> bool:
        """Append a pair. Returns False (and changes nothing) if the term exists."""
        if pair.term in self._index:
            return False
        self._index[pair.term] = pair
        self.pairs.append(pair)
        if record is not None:
            self.accuracy.records[pair.term] = record
        else:
            self.accuracy.ensure(pair.term)
        return True

    def get(self, term: str) -> WordPair:
        return self._index[term]

    def terms(self) -> list[str]:
        return [pair.term for pair in self.pairs]

    def record_of(self, term: str) -> AccuracyRecord:
        return self.accuracy.get(term)

    def rows(self) -> list[tuple[str, str, int, int]]:
        """(term, translation, correct, attempted) for every pair, in order."""
        rows = []
        for pair in self.pairs:
            record = self.accuracy.get(pair.term)
            rows.append((pair.term, pair.translation, record.correct, record.attempted))
        return rows

    def word_stats(self) -> list[dict]:
        """Per-word stats in dataset order."""
        stats = []
        for pair in self.pairs:
            record = self.accuracy.get(pair.term)
            stats.append({
                'term': pair.term,
                'translation': pair.translation,
                'correct': record.correct,
                'attempted': record.attempted,
                'accuracy': record.accuracy
            })
        return stats
