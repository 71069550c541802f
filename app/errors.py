"""Errors raised by the content pipeline core."""

from typing import Any, Optional


class ContentError(Exception):
    """Base class for failures surfaced to API callers."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ContentError):
    """A referenced source, document or job does not exist."""


class ValidationError(ContentError):
    """A required field is missing or malformed."""


class UnsupportedJobTypeError(ContentError):
    """The job type has no transition to dispatch to."""


class JobConflictError(ContentError):
    """The job was not queued when a runner tried to claim it."""


class JobExecutionError(ContentError):
    """A claimed job failed; ``job`` is the persisted failed snapshot."""

    def __init__(self, message: str, job: Optional[Any] = None):
        super().__init__(message)
        self.job = job
