"""Error types shared by the summarizer client and the page service."""
from typing import Optional


class SummarizerError(Exception):
    """Base class for errors surfaced to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SummarizerError):
    """The submitted URL is missing or malformed. No request was made."""

    def __init__(self, reason: str, message: Optional[str] = None):
        super().__init__(message or reason)
        self.reason = reason


class TransportError(SummarizerError):
    """Network failure or a non-2xx response from the summarize endpoint."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class UnexpectedError(SummarizerError):
    """Any other failure while handling a submission."""


class SubmissionInProgressError(SummarizerError):
    """A submission is already in flight for this session."""

    def __init__(self, message: str = "A summary request is already in progress"):
        super().__init__(message)


class ActionUnavailableError(SummarizerError):
    """The requested action has nothing to act on."""


class ConfigurationError(SummarizerError):
    """Required configuration is missing."""
