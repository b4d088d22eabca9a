"""
Datastore Interface

This module defines the contract for URL datastores. A datastore owns three
linked indexes and exposes only composite operations over them:

- Mapping: short code -> long URL (one URL per active code)
- Reverse index: long URL -> codes currently mapping to it (never empty)
- Click counts: short code -> number of successful resolves

Implementations must keep the indexes consistent with each other after
every operation: a code is in the mapping iff it has a click count, and
the reverse index lists exactly the mapped codes under their URL.
"""

from abc import ABC, abstractmethod
from typing import Optional

from shortener.db.snapshot import PathLike, SnapshotModel


class UrlDatastore(ABC):
    """
    Abstract base class for URL datastores.

    Not-found outcomes are return values (None, False, -1), never exceptions.
    """

    @abstractmethod
    def create_code(self, long_url: str, custom_code: Optional[str] = None) -> str:
        """
        Map a new short code to `long_url`.

        Args:
            long_url: URL the code resolves to (already validated by the caller)
            custom_code: Code to use instead of a random one (already
                format-checked by the caller)

        Returns:
            The code now mapped to `long_url`

        Raises:
            CodeInUseError: If `custom_code` is already mapped
        """
        pass

    @abstractmethod
    def resolve(self, short_code: str) -> Optional[str]:
        """
        Return the URL for `short_code` and count the access.

        Returns:
            The long URL, or None if the code is not active
        """
        pass

    @abstractmethod
    def delete_code(self, short_code: str) -> bool:
        """
        Remove one code and its click count.

        Returns:
            True if the code existed
        """
        pass

    @abstractmethod
    def delete_all_codes_for_url(self, long_url: str) -> bool:
        """
        Remove every code mapping to `long_url`.

        Returns:
            True if the URL had at least one active code
        """
        pass

    @abstractmethod
    def get_click_count(self, short_code: str) -> int:
        """
        Returns:
            The click count, or -1 if the code is not active
        """
        pass

    @abstractmethod
    def is_code_in_use(self, short_code: str) -> bool:
        pass

    @abstractmethod
    def export_snapshot(self) -> SnapshotModel:
        """Return a consistent point-in-time copy of all indexes."""
        pass

    @abstractmethod
    def import_snapshot(self, snapshot: SnapshotModel) -> None:
        """Replace the whole store with the contents of `snapshot`."""
        pass

    @abstractmethod
    def export_to_file(self, path: PathLike) -> None:
        """
        Write a snapshot of the store to a JSON file.

        Raises:
            SnapshotError: If the file cannot be written
        """
        pass

    @abstractmethod
    def import_from_file(self, path: PathLike) -> None:
        """
        Replace the store with a snapshot read from a JSON file.

        Raises:
            SnapshotError: If the file cannot be read or parsed; the
                store is left unchanged
        """
        pass
