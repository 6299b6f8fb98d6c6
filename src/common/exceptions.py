"""Custom exceptions for the icedb pipeline.

Parse, I/O and tracker failures are fatal: they propagate to the workflow
driver, which logs them and exits non-zero without persisting anything.
"""

from typing import Optional


class IcedbError(Exception):
    """Base exception for icedb errors."""
    pass


class MalformedRecordError(IcedbError):
    """Raised when a persisted line cannot be decoded into the expected record."""

    def __init__(self, path: str, line_number: int, reason: str):
        """
        Initialize the exception.

        Args:
            path: File the record was read from
            line_number: 1-based line number of the offending record
            reason: Description of the parse or validation failure
        """
        self.path = path
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"Malformed record at {path}:{line_number}: {reason}")


class IssueTrackerError(IcedbError):
    """Raised when the issue tracker returns an error or cannot be reached."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        status = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"Issue tracker request failed{status}: {url}: {message}")


class ConfigurationError(IcedbError):
    """Raised for missing or invalid configuration values."""
    pass
