"""
Exception hierarchy for ssm-edit.

Errors raised by the store client, the retry policy, the prompt and the
configuration loader all derive from SsmEditError so the CLI can report
them uniformly.
"""

from typing import Optional


class SsmEditError(Exception):
    """Base exception for all ssm-edit errors."""


class ConfigError(SsmEditError):
    """Configuration file could not be read or failed validation."""


class RemoteError(SsmEditError):
    """Parameter Store request failed (transport, auth or API error)."""

    def __init__(self, message: str, code: str = "", operation: str = ""):
        self.code = code
        self.operation = operation
        super().__init__(message)


class ValidationError(RemoteError):
    """The store rejected the request itself, e.g. creating a name that exists."""


class PersistError(SsmEditError):
    """A write kept failing until the retry budget ran out."""

    def __init__(self, attempts: int, last_error: Optional[Exception] = None):
        self.attempts = attempts
        self.last_error = last_error
        message = f"Write failed after {attempts} attempts"
        if last_error is not None:
            message += f": {last_error}"
        super().__init__(message)


class PromptCancelled(SsmEditError):
    """The user interrupted an interactive prompt."""
