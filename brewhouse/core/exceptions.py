"""
Centralised exception definitions for the brewhouse monitor.
All custom exceptions should inherit from BrewhouseError.
"""

class BrewhouseError(Exception):
    """Base class for every custom exception thrown by this project."""
    status_code = 500

class ConfigurationError(BrewhouseError):
    """Raised when configuration files or environment variables are invalid."""

class UnknownProcess(BrewhouseError):
    """Process identifier is not part of the configured set."""
    status_code = 404

    def __init__(self, process: str):
        super().__init__(f"Process not found: {process!r}")
        self.process = process

class InvalidDate(BrewhouseError):
    """A calendar date could not be parsed."""
    status_code = 400

    def __init__(self, text: str):
        super().__init__(f"Invalid date: {text!r} (expected YYYY-MM-DD)")
        self.text = text

class StorageUnavailable(BrewhouseError):
    """Persistence medium unreachable, timed out, or a read/write failed."""
    status_code = 500

class ValidationError(BrewhouseError):
    """Malformed user input such as an out-of-range rating."""
    status_code = 400

class NotFound(BrewhouseError):
    """Requested catalog record does not exist."""
    status_code = 404
