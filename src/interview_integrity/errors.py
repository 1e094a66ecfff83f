"""
Error taxonomy for the question integrity tools.

Every failure the tools report to an operator derives from IntegrityError,
so batch operations can isolate a single record's failure and keep going.
"""
from typing import Optional


class IntegrityError(Exception):
    """Base class for all question integrity errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(IntegrityError):
    """The tool is not configured well enough to run (credential, model)."""


class AuthError(ConfigurationError):
    """No usable credential was supplied for the generation backend."""


class NotFoundError(IntegrityError):
    """The targeted question does not exist in storage."""


class ReplacementValidationError(IntegrityError):
    """A replacement body would itself be classified as degraded."""


class NetworkError(IntegrityError):
    """The generation backend could not be reached in time."""


class BackendError(IntegrityError):
    """The generation backend answered with an explicit error payload."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        status: Optional[str] = None
    ):
        super().__init__(message)
        self.code = code
        self.status = status

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        status = f" {self.status}" if self.status else ""
        return f"[{self.code}{status}] {self.message}"


class StorageError(IntegrityError):
    """Reading from or writing to question storage failed."""
