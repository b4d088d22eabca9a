"""
Datastore Snapshot Format

This module defines the JSON document used to export and import the whole
datastore, and the file helpers that read and write it.

Wire format:
    {
      "longToShortUrlMap":     {"<longUrl>": ["<code>", ...], ...},
      "shortToLongUrlMap":     {"<code>": "<longUrl>", ...},
      "shortUrlClickCountMap": {"<code>": <int>, ...}
    }

Design Decisions:
- Pydantic checks the shape and types of the document only; the three maps
  are trusted to agree with each other and are loaded verbatim
- All three maps are required; a document missing one is rejected rather
  than treated as empty
- Files are written to a temporary sibling and moved into place, so a failed
  export never leaves a truncated snapshot behind
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, ValidationError

from shortener.core.exceptions import SnapshotError

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class SnapshotModel(BaseModel):
    """Point-in-time copy of the three datastore indexes."""
    model_config = ConfigDict(populate_by_name=True)

    long_to_short_url_map: Dict[str, List[str]] = Field(
        ..., alias="longToShortUrlMap", description="Long URL to the codes mapping to it"
    )
    short_to_long_url_map: Dict[str, str] = Field(
        ..., alias="shortToLongUrlMap", description="Code to long URL"
    )
    short_url_click_count_map: Dict[str, NonNegativeInt] = Field(
        ..., alias="shortUrlClickCountMap", description="Code to click count"
    )

    def to_json(self) -> str:
        """
        Serialize using the camelCase wire keys.

        Raises:
            SnapshotError: If a key or value cannot be encoded as UTF-8 JSON
        """
        try:
            return self.model_dump_json(by_alias=True, indent=2)
        except ValueError as e:
            # PydanticSerializationError, e.g. a lone surrogate in a URL
            raise SnapshotError(f"cannot serialize snapshot: {e}", original_error=e)

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "SnapshotModel":
        """
        Parse a snapshot document.

        Raises:
            SnapshotError: If the document is not valid JSON or has the wrong shape
        """
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise SnapshotError(f"malformed snapshot document ({e.error_count()} errors)", original_error=e)


def write_snapshot_file(snapshot: SnapshotModel, path: PathLike) -> None:
    """
    Write a snapshot to `path`, replacing any existing file atomically.

    Raises:
        SnapshotError: If the file cannot be written
    """
    target = Path(path)
    try:
        payload = snapshot.to_json()
    except SnapshotError as e:
        e.path = str(target)
        logger.error(f"Failed to serialize snapshot for {target}: {e}")
        raise

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
        )
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
        os.replace(tmp_name, target)
        tmp_name = None
    except OSError as e:
        logger.error(f"Failed to write snapshot to {target}: {e}", exc_info=True)
        raise SnapshotError(f"cannot write {target}: {e.strerror or e}", path=str(target), original_error=e)
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)


def read_snapshot_file(path: PathLike) -> SnapshotModel:
    """
    Read and parse a snapshot file.

    Raises:
        SnapshotError: If the file cannot be read or parsed
    """
    source = Path(path)
    try:
        data = source.read_bytes()
    except OSError as e:
        logger.error(f"Failed to read snapshot from {source}: {e}")
        raise SnapshotError(f"cannot read {source}: {e.strerror or e}", path=str(source), original_error=e)

    try:
        return SnapshotModel.from_json(data)
    except SnapshotError as e:
        e.path = str(source)
        logger.error(f"Rejected snapshot {source}: {e}")
        raise
