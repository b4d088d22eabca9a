"""
URL Shortening Service

This service is the façade between user-facing callers and the datastore:
- Validating long URLs, short URLs and custom codes
- Building full short URLs from codes and extracting codes back
- Translating datastore outcomes into Result objects

Design Decisions:
- The datastore trusts its inputs; every check happens here first
- Expected failures (bad input, unknown code, unreadable snapshot) become
  failed Results with a message; unexpected errors propagate
- URLs are stored exactly as given
"""

import logging
import os
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from shortener.core.code_generator import CodeGenerator
from shortener.core.exceptions import CodeInUseError, SnapshotError
from shortener.core.setting import settings
from shortener.core.validators import validate_original_url, validate_short_url
from shortener.db.interface import UrlDatastore

logger = logging.getLogger(__name__)

T = TypeVar("T")

INVALID_CUSTOM_CODE = (
    "Short URL code is invalid. Codes must be {length} characters long and contain "
    "only alphanumeric characters excluding 0, O, I, and l."
)
CODE_IN_USE = "Short URL code is already in use."
SHORT_URL_NOT_RECOGNIZED = "Short URL is not recognized."
URL_NOT_RECOGNIZED = "URL is not recognized."
EMPTY_FILE_PATH = "File path cannot be empty."
FILE_NOT_FOUND = "File does not exist."


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a service call: a value on success, a message on failure."""
    is_success: bool
    value: Optional[T] = None
    error_message: str = ""

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(True, value, "")

    @classmethod
    def fail(cls, message: str) -> "Result[T]":
        return cls(False, None, message)


def build_short_url(short_code: str, base_url: Optional[str] = None) -> str:
    """
    Build the full short URL for a code.

    Example:
        build_short_url("abcd1234") -> "https://tinyurl.com/abcd1234"
    """
    return (base_url or settings.BASE_URL) + short_code


def extract_code(short_url: str, base_url: Optional[str] = None) -> str:
    """
    Extract the code from a short URL that starts with the base URL.

    Example:
        extract_code("https://tinyurl.com/abcd1234") -> "abcd1234"
    """
    return short_url[len(base_url or settings.BASE_URL):]


class URLShorteningService:
    """
    User-facing operations over a UrlDatastore.

    Every method returns a Result; none raises for invalid input or
    unknown codes.
    """

    def __init__(self, datastore: UrlDatastore, code_generator: Optional[CodeGenerator] = None):
        """
        Initialize the URL shortening service.

        Args:
            datastore: Datastore holding the code mappings
            code_generator: Generator used to validate custom codes
                (default: the datastore's own generator, if it has one)
        """
        self.datastore = datastore
        self.code_generator = code_generator or getattr(datastore, "code_generator", None) or CodeGenerator()

    def shorten_url(self, long_url: str, custom_code: Optional[str] = None) -> Result[str]:
        """
        Create a short URL for `long_url`.

        Args:
            long_url: The long URL to shorten
            custom_code: Optional code to use instead of a random one

        Returns:
            Result holding the full short URL
        """
        error = validate_original_url(long_url)
        if error:
            return Result.fail(error)

        if custom_code is not None:
            if not self.code_generator.validate_custom_code(custom_code):
                return Result.fail(INVALID_CUSTOM_CODE.format(length=self.code_generator.length))
            if self.datastore.is_code_in_use(custom_code):
                return Result.fail(CODE_IN_USE)

        try:
            short_code = self.datastore.create_code(long_url, custom_code)
        except CodeInUseError:
            # Another caller took the code between the check and the insert
            return Result.fail(CODE_IN_USE)

        logger.info(f"Shortened {long_url} to code {short_code}")
        return Result.success(build_short_url(short_code))

    def get_original_url(self, short_url: str) -> Result[str]:
        """
        Resolve a short URL, counting the access.

        Returns:
            Result holding the original long URL
        """
        error = validate_short_url(short_url)
        if error:
            return Result.fail(error)

        long_url = self.datastore.resolve(extract_code(short_url))
        if long_url is None:
            return Result.fail(SHORT_URL_NOT_RECOGNIZED)
        return Result.success(long_url)

    def delete_short_url(self, short_url: str) -> Result[bool]:
        """
        Delete a single short URL.

        Returns:
            Result holding True if the short URL existed
        """
        error = validate_short_url(short_url)
        if error:
            return Result.fail(error)
        return Result.success(self.datastore.delete_code(extract_code(short_url)))

    def delete_all_short_urls_by_original_url(self, long_url: str) -> Result[bool]:
        """
        Delete every short URL pointing at `long_url`.

        Returns:
            Result holding True if at least one short URL existed
        """
        error = validate_original_url(long_url)
        if error:
            return Result.fail(error)
        return Result.success(self.datastore.delete_all_codes_for_url(long_url))

    def get_click_count(self, short_url: str) -> Result[int]:
        """
        Get how many times a short URL has been resolved.

        Returns:
            Result holding the click count
        """
        error = validate_short_url(short_url)
        if error:
            return Result.fail(error)

        count = self.datastore.get_click_count(extract_code(short_url))
        if count == -1:
            return Result.fail(URL_NOT_RECOGNIZED)
        return Result.success(count)

    def export_datastore(self, file_path: str) -> Result[bool]:
        """Export the datastore to a JSON snapshot file."""
        if not file_path or not file_path.strip():
            return Result.fail(EMPTY_FILE_PATH)
        try:
            self.datastore.export_to_file(file_path)
        except SnapshotError as e:
            return Result.fail(str(e))
        return Result.success(True)

    def import_datastore(self, file_path: str) -> Result[bool]:
        """Replace the datastore with a JSON snapshot file."""
        if not file_path or not file_path.strip():
            return Result.fail(EMPTY_FILE_PATH)
        if not os.path.isfile(file_path):
            return Result.fail(FILE_NOT_FOUND)
        try:
            self.datastore.import_from_file(file_path)
        except SnapshotError as e:
            return Result.fail(str(e))
        return Result.success(True)
