"""Exception hierarchy for the vocab drill core."""


class DrillError(Exception):
    """Base class for all drill errors."""


class FileError(DrillError):
    """A dataset file could not be read or written."""

    NOT_FOUND = 'not_found'
    READ_FAILURE = 'read_failure'
    WRITE_FAILURE = 'write_failure'

    kind = None

    def __init__(self, path: str, message: str = None):
        self.path = path
        super().__init__(message or f"{self.kind}: {path}")


class DatasetNotFoundError(FileError):
    kind = FileError.NOT_FOUND

    def __init__(self, path: str):
        super().__init__(path, f"File not found: {path}")


class DatasetReadError(FileError):
    kind = FileError.READ_FAILURE

    def __init__(self, path: str, reason: str = ''):
        message = f"Error reading the file {path}"
        super().__init__(path, f"{message}: {reason}" if reason else message)


class DatasetWriteError(FileError):
    kind = FileError.WRITE_FAILURE

    def __init__(self, path: str, reason: str = ''):
        message = f"Error writing the file {path}"
        super().__init__(path, f"{message}: {reason}" if reason else message)


class PreconditionError(DrillError):
    """An operation was requested without the state it needs."""


class RoundStateError(PreconditionError):
    """A round operation was called in the wrong round state."""
