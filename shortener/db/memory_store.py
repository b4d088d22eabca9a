"""
In-Memory Datastore

Thread-safe implementation of the UrlDatastore interface backed by plain
dictionaries.

Design Decisions:
- One re-entrant lock guards all three indexes. Every composite operation
  (create, delete, bulk delete, import) and every read runs under it, so a
  concurrent caller sees either the whole pre-state or the whole post-state
- The click increment happens inside `resolve` while the lock is held, so
  concurrent resolves of one code never lose an update
- Random codes are rejection-sampled against the mapping while the lock is
  held; the chosen code cannot be taken by another thread before insertion
- Snapshot files are parsed before the lock is taken and written after it
  is released; only the in-memory copy and the replace run locked
"""

import logging
import threading
from typing import Dict, List, Optional

from shortener.core.code_generator import CodeGenerator
from shortener.core.exceptions import CodeInUseError
from shortener.db.interface import UrlDatastore
from shortener.db.snapshot import (
    PathLike,
    SnapshotModel,
    read_snapshot_file,
    write_snapshot_file,
)

logger = logging.getLogger(__name__)


class InMemoryUrlDatastore(UrlDatastore):
    """
    Datastore holding mapping, reverse index and click counts in memory.

    The indexes are never handed out; callers get copies through
    `export_snapshot` or `codes_for_url`.
    """

    def __init__(self, code_generator: Optional[CodeGenerator] = None):
        """
        Initialize an empty datastore.

        Args:
            code_generator: Source of random codes (default: built from settings)
        """
        self.code_generator = code_generator or CodeGenerator()

        self._lock = threading.RLock()
        self._short_to_long: Dict[str, str] = {}
        self._long_to_short: Dict[str, List[str]] = {}
        self._click_counts: Dict[str, int] = {}

    def create_code(self, long_url: str, custom_code: Optional[str] = None) -> str:
        with self._lock:
            if custom_code is None:
                short_code = self._draw_unused_code()
            elif custom_code in self._short_to_long:
                raise CodeInUseError(custom_code)
            else:
                short_code = custom_code

            self._short_to_long[short_code] = long_url
            self._long_to_short.setdefault(long_url, []).append(short_code)
            self._click_counts[short_code] = 0

        logger.debug(f"Created code {short_code} (custom={custom_code is not None})")
        return short_code

    def _draw_unused_code(self) -> str:
        # Caller holds the lock. Collisions are expected roughly once per
        # code_space / len(store) draws, so the loop almost never repeats.
        for attempt, candidate in enumerate(self.code_generator.iter_random_codes(), start=1):
            if candidate not in self._short_to_long:
                return candidate
            logger.debug(f"Random code collision on attempt {attempt}, drawing again")

    def resolve(self, short_code: str) -> Optional[str]:
        with self._lock:
            long_url = self._short_to_long.get(short_code)
            if long_url is None:
                return None
            self._click_counts[short_code] += 1
            return long_url

    def delete_code(self, short_code: str) -> bool:
        with self._lock:
            long_url = self._short_to_long.pop(short_code, None)
            if long_url is None:
                return False
            self._click_counts.pop(short_code, None)

            codes = self._long_to_short.get(long_url)
            if codes is not None:
                if short_code in codes:
                    codes.remove(short_code)
                if not codes:
                    del self._long_to_short[long_url]

        logger.debug(f"Deleted code {short_code}")
        return True

    def delete_all_codes_for_url(self, long_url: str) -> bool:
        with self._lock:
            codes = self._long_to_short.pop(long_url, None)
            if not codes:
                return False
            for short_code in codes:
                self._short_to_long.pop(short_code, None)
                self._click_counts.pop(short_code, None)

        logger.debug(f"Deleted {len(codes)} codes for {long_url}")
        return True

    def get_click_count(self, short_code: str) -> int:
        with self._lock:
            return self._click_counts.get(short_code, -1)

    def is_code_in_use(self, short_code: str) -> bool:
        with self._lock:
            return short_code in self._short_to_long

    def codes_for_url(self, long_url: str) -> List[str]:
        """
        Get the codes currently mapping to `long_url`.

        Returns:
            A copy of the reverse index entry, empty if the URL has no codes
        """
        with self._lock:
            return list(self._long_to_short.get(long_url, ()))

    def __len__(self) -> int:
        with self._lock:
            return len(self._short_to_long)

    def export_snapshot(self) -> SnapshotModel:
        with self._lock:
            return SnapshotModel(
                long_to_short_url_map={url: list(codes) for url, codes in self._long_to_short.items()},
                short_to_long_url_map=dict(self._short_to_long),
                short_url_click_count_map=dict(self._click_counts),
            )

    def import_snapshot(self, snapshot: SnapshotModel) -> None:
        # Copies are built first so the locked section is a plain swap
        long_to_short = {url: list(codes) for url, codes in snapshot.long_to_short_url_map.items()}
        short_to_long = dict(snapshot.short_to_long_url_map)
        click_counts = dict(snapshot.short_url_click_count_map)

        with self._lock:
            self._long_to_short.clear()
            self._short_to_long.clear()
            self._click_counts.clear()
            self._long_to_short.update(long_to_short)
            self._short_to_long.update(short_to_long)
            self._click_counts.update(click_counts)

        logger.info(f"Imported snapshot with {len(short_to_long)} codes")

    def export_to_file(self, path: PathLike) -> None:
        snapshot = self.export_snapshot()
        write_snapshot_file(snapshot, path)
        logger.info(f"Exported {len(snapshot.short_to_long_url_map)} codes to {path}")

    def import_from_file(self, path: PathLike) -> None:
        snapshot = read_snapshot_file(path)
        self.import_snapshot(snapshot)
