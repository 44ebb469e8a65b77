"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod


class Storage(ABC):
    """Abstract base class for dataset and config storage."""

    @abstractmethod
    def load_config(self) -> dict:
        """Load configuration. Returns config dict ({} when none is stored)."""
        pass

    @abstractmethod
    def load_dataset(self, source: str = None):
        """Load a Dataset from source.
        Raises DatasetNotFoundError or DatasetReadError."""
        pass

    @abstractmethod
    def save_dataset(self, dataset, destination: str = None) -> None:
        """Replace destination with the serialized dataset.
        Raises DatasetWriteError."""
        pass


class Presenter(ABC):
    """Output side of the presentation shell. The shell answers through
    DrillSession.submit_written_answer / submit_choice / submit_correction."""

    @abstractmethod
    def show_prompt(self, text: str) -> None:
        pass

    @abstractmethod
    def show_options(self, options: list[str]) -> None:
        pass

    @abstractmethod
    def show_report(self, text: str) -> None:
        pass

    @abstractmethod
    def notify_error(self, message: str) -> None:
        pass


class RandomSource(ABC):
    """Every random decision of a round goes through this interface."""

    @abstractmethod
    def choice(self, items: list):
        """Return one element of a non-empty list, uniformly."""
        pass

    @abstractmethod
    def coin_flip(self) -> bool:
        """Return True or False with equal probability."""
        pass

    @abstractmethod
    def shuffle(self, items: list) -> None:
        """Shuffle items in place."""
        pass
