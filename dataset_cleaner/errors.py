"""Exceptions raised by the cleaning pipeline."""


class DatasetCleanerError(Exception):
    """Base class for pipeline errors."""


class MalformedSourceRecord(DatasetCleanerError, ValueError):
    """A raw record is missing a field its table formatter needs."""

    def __init__(self, table: str, field: str, detail: str = ""):
        self.table = table
        self.field = field
        message = f"Record from table '{table}' has no usable '{field}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class RemoteCallFailed(DatasetCleanerError, RuntimeError):
    """The chat-completion endpoint could not be reached or errored."""


class CheckpointWriteFailed(DatasetCleanerError, RuntimeError):
    """Persisting the accepted records failed; the run cannot continue."""
