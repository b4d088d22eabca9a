"""
Custom Exceptions

This module defines custom exceptions for better error handling
and more specific error messages.

Only caller misuse and persistence failures are exceptions. Looking up,
deleting or counting a code that does not exist is a normal outcome and
is reported through return values (None, False or -1).
"""

from typing import Optional


class URLShortenerException(Exception):
    """Base exception for URL shortener service."""
    pass


class CodeInUseError(URLShortenerException):
    """Raised when a custom short code is already mapped to a URL."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__("Short URL code is already in use.")


class SnapshotError(URLShortenerException):
    """Raised when exporting or importing a datastore snapshot fails."""

    def __init__(self, message: str, path: Optional[str] = None, original_error: Exception = None):
        self.path = path
        self.original_error = original_error
        super().__init__(f"Snapshot error: {message}")


class ConfigurationError(URLShortenerException):
    """Raised when code generation settings cannot produce enough codes."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid configuration: {reason}")
