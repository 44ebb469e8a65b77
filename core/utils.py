"""Utility functions for vocab drill application."""

import random

from .config import REPORT_PRECISION
from .interfaces import RandomSource


def answers_match(answer: str | None, expected: str) -> bool:
    """Case-insensitive exact comparison. A missing answer never matches."""
    if answer is None:
        return False
    return answer.lower() == expected.lower()


def format_accuracy(accuracy: float) -> str:
    return f"{accuracy:.{REPORT_PRECISION}f}"


class StdRandomSource(RandomSource):
    """RandomSource backed by random.Random. Pass a seed for repeatable runs."""

    def __init__(self, seed=None):
        self._random = random.Random(seed)

    def choice(self, items: list):
        return self._random.choice(items)

    def coin_flip(self) -> bool:
        return self._random.random() < 0.5

    def shuffle(self, items: list) -> None:
        self._random.shuffle(items)
