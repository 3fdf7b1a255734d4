"""File-level persistence for cached estimates.

Loading never fails on the two expected conditions: a missing cache file
is bootstrapped as an empty array, and a corrupt one is ignored (and left
on disk untouched).  Any other OS error surfaces to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from core.models import Estimate
from data.cache_io import CacheParseError, WriteOptions, get_cached_data, write_to_file

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Cache file not found. Creating new cache file..."
CORRUPT_MESSAGE = (
    "There was an error parsing the cache file. "
    "Ignoring cache and fetching fresh estimates..."
)


class LoadStatus(str, Enum):
    """Outcome of reading the cache file."""

    LOADED = "LOADED"
    NOT_FOUND = "NOT_FOUND"
    CORRUPT = "CORRUPT"
    OTHER_ERROR = "OTHER_ERROR"


@dataclass
class LoadResult:
    """What ``CacheStore.read`` found on disk."""

    status: LoadStatus
    estimates: list[Estimate] = field(default_factory=list)
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status == LoadStatus.LOADED


class CacheStore:
    """Reads and writes the JSON estimates cache at one fixed path."""

    def __init__(self, path: Path, options: WriteOptions | None = None) -> None:
        self._path = Path(path)
        self._options = options or WriteOptions()

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> LoadResult:
        """Read and parse the cache file without side effects."""
        try:
            with open(self._path, encoding=self._options.encoding) as f:
                raw = f.read()
        except FileNotFoundError as exc:
            return LoadResult(LoadStatus.NOT_FOUND, error=exc)
        except UnicodeDecodeError as exc:
            return LoadResult(LoadStatus.CORRUPT, error=exc)
        except OSError as exc:
            return LoadResult(LoadStatus.OTHER_ERROR, error=exc)

        try:
            estimates = get_cached_data(raw)
        except CacheParseError as exc:
            return LoadResult(LoadStatus.CORRUPT, error=exc)
        return LoadResult(LoadStatus.LOADED, estimates=estimates)

    def load(self) -> list[Estimate]:
        """Load cached estimates, recovering from a missing or corrupt file.

        Returns:
            Parsed estimates, or ``[]`` when the file was missing (it is
            created) or could not be parsed.

        Raises:
            OSError: Any I/O failure other than the file being absent.
        """
        result = self.read()
        if result.ok:
            logger.debug(
                "Loaded %d cached estimates from %s", len(result.estimates), self._path
            )
            return result.estimates

        match result.status:
            case LoadStatus.NOT_FOUND:
                logger.warning(NOT_FOUND_MESSAGE)
                write_to_file(self._path, [], self._options)
                return []
            case LoadStatus.CORRUPT:
                logger.warning(CORRUPT_MESSAGE)
                logger.debug("Cache parse failure for %s: %s", self._path, result.error)
                return []
            case _:
                raise result.error

    def write(self, estimates: Sequence[Estimate]) -> None:
        """Replace the cache file contents with ``estimates``."""
        write_to_file(self._path, estimates, self._options)
