"""Error taxonomy shared by the storage, service and transport layers."""

from __future__ import annotations

from typing import Any

UNKNOWN_ERROR_MESSAGE = "Unknown Error"


class StorageError(Exception):
    """Raised by the storage gateway for any persistence failure."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "")
        self.message = message


class ProductValidationError(Exception):
    """Raised when a product payload fails validation before storage."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__("Validation failed")
        self.message = "Validation failed"
        self.errors = errors


class MalformedBodyError(Exception):
    """Raised when a request body cannot be decoded into a field mapping."""

    def __init__(self, message: str = "Malformed request body") -> None:
        super().__init__(message)
        self.message = message


def error_message(exc: BaseException) -> str:
    """Return the failure's message, or the generic fallback when it has none."""
    message = getattr(exc, "message", None) or str(exc)
    return message if message else UNKNOWN_ERROR_MESSAGE
