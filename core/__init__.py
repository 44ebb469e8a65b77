from .models import WordPair, AccuracyRecord, AccuracyModel, Dataset
from .interfaces import Storage, Presenter, RandomSource
from .errors import (
    DrillError, FileError, DatasetNotFoundError, DatasetReadError, DatasetWriteError,
    PreconditionError, RoundStateError
)
from .selection import select_weakest
from .questions import Question, build_options
from .round import DrillRound, build_report
from .session import DrillSession
from .utils import StdRandomSource, answers_match
from .config import (
    REQUIRED_CORRECT_PER_ROUND, OPTION_COUNT,
    BASIC_SELECTION_SIZE, EXTENDED_SELECTION_SIZE,
    DEFAULT_DIRECTION, WRITTEN, MULTIPLE_CHOICE
)

__all__ = [
    'WordPair', 'AccuracyRecord', 'AccuracyModel', 'Dataset',
    'Storage', 'Presenter', 'RandomSource',
    'DrillError', 'FileError', 'DatasetNotFoundError', 'DatasetReadError',
    'DatasetWriteError', 'PreconditionError', 'RoundStateError',
    'select_weakest',
    'Question', 'build_options',
    'DrillRound', 'build_report',
    'DrillSession',
    'StdRandomSource', 'answers_match',
    'REQUIRED_CORRECT_PER_ROUND', 'OPTION_COUNT',
    'BASIC_SELECTION_SIZE', 'EXTENDED_SELECTION_SIZE',
    'DEFAULT_DIRECTION', 'WRITTEN', 'MULTIPLE_CHOICE'
]
