"""File-based storage implementation."""

import json
import logging
import os
import shutil
import tempfile

from core.config import (
    CONFIG_FILE, DEFAULT_DATASET_FILE,
    DATASET_DELIMITER, MINIMAL_DELIMITER, MIN_RECORD_FIELDS
)
from core.errors import DatasetNotFoundError, DatasetReadError, DatasetWriteError
from core.interfaces import Storage
from core.models import AccuracyRecord, Dataset, WordPair

logger = logging.getLogger(__name__)


def detect_delimiter(lines: list[str]) -> str:
    """Comma unless the first record only uses semicolons."""
    for line in lines:
        if not line.strip():
            continue
        if DATASET_DELIMITER not in line and MINIMAL_DELIMITER in line:
            return MINIMAL_DELIMITER
        return DATASET_DELIMITER
    return DATASET_DELIMITER


def parse_record(line: str, delimiter: str) -> tuple[WordPair, AccuracyRecord] | None:
    """Parse one dataset line. Returns None for lines that aren't a record."""
    fields = [field.strip() for field in line.split(delimiter)]
    if len(fields) < MIN_RECORD_FIELDS or not fields[0]:
        return None
    accuracy = fields[2] if len(fields) > 2 else None
    return WordPair(fields[0], fields[1]), AccuracyRecord.from_fraction(accuracy)


def format_record(pair: WordPair, record: AccuracyRecord) -> str:
    return DATASET_DELIMITER.join([pair.term, pair.translation, record.to_fraction()])


class FileStorage(Storage):
    """Plain-text dataset files, one `term,translation,correct/attempted` per line."""

    def __init__(self, config_file: str = None, data_dir: str = None, delimiter: str = None):
        self.config_file = config_file or os.path.expanduser(CONFIG_FILE)
        # Project root is one level up from server/
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        self.data_dir = data_dir or project_root
        self.delimiter = delimiter

    def _get_dataset_file(self, path: str = None) -> str:
        """Resolve a dataset path relative to the data directory."""
        path = path or DEFAULT_DATASET_FILE
        if os.path.isabs(path):
            return path
        return os.path.join(self.data_dir, path)

    def in_data_dir(self, path: str = None) -> bool:
        """True if path resolves to a file inside the data directory."""
        data_dir = os.path.realpath(self.data_dir)
        resolved = os.path.realpath(self._get_dataset_file(path))
        return os.path.commonpath([data_dir, resolved]) == data_dir

    def load_config(self) -> dict:
        if not os.path.exists(self.config_file):
            return {}
        try:
            with open(self.config_file, 'r') as f:
                config = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable config file {self.config_file}: {e}")
            return {}
        if not isinstance(config, dict):
            logger.warning(f"Ignoring config file {self.config_file}: expected a JSON object")
            return {}
        return config

    def load_dataset(self, source: str = None) -> Dataset:
        path = self._get_dataset_file(source)
        if not os.path.isfile(path):
            raise DatasetNotFoundError(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                lines = f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise DatasetReadError(path, str(e)) from e

        delimiter = self.delimiter or detect_delimiter(lines)
        dataset = Dataset()
        skipped = 0
        for line in lines:
            parsed = parse_record(line, delimiter)
            if parsed is None:
                if line.strip():
                    skipped += 1
                continue
            pair, record = parsed
            if not dataset.add(pair, record):
                logger.warning(f"Duplicate term {pair.term!r} in {path}, keeping the first one")

        logger.info(f"Loaded {len(dataset)} word pairs from {path} ({skipped} lines skipped)")
        return dataset

    def save_dataset(self, dataset: Dataset, destination: str = None) -> None:
        path = self._get_dataset_file(destination)
        directory = os.path.dirname(path) or '.'
        tmp_path = None
        try:
            # Write next to the target and swap it in, so a failed save keeps the old file
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.words-', suffix='.tmp')
            with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
                for pair in dataset:
                    f.write(format_record(pair, dataset.record_of(pair.term)) + '\n')
            # mkstemp creates 0600; keep the permissions of the file being replaced
            if os.path.exists(path):
                shutil.copymode(path, tmp_path)
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise DatasetWriteError(path, str(e)) from e
        logger.info(f"Saved {len(dataset)} word pairs to {path}")
