"""Read/write helpers for the JSON estimates cache file.

Parsing and serialization only; deciding what to do about missing or
damaged files is data/cache_store.py's job.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from core.models import Estimate

logger = logging.getLogger(__name__)

_ESTIMATE_LIST = TypeAdapter(list[Estimate])


class CacheParseError(ValueError):
    """Cache file contents are not a valid JSON array of estimates."""


@dataclass(frozen=True)
class WriteOptions:
    """How estimates are serialized to disk."""

    encoding: str = "utf-8"
    indent: int | None = None


def get_cached_data(raw_contents: str) -> list[Estimate]:
    """Parse raw cache file contents into estimates.

    Raises:
        CacheParseError: Malformed JSON, a non-array payload, or a record
            that fails validation.
    """
    try:
        payload = json.loads(raw_contents)
    except json.JSONDecodeError as exc:
        raise CacheParseError(f"Invalid JSON in cache file: {exc}") from exc

    if not isinstance(payload, list):
        raise CacheParseError(
            f"Cache file must hold a JSON array, got {type(payload).__name__}"
        )

    try:
        return _ESTIMATE_LIST.validate_python(payload)
    except ValidationError as exc:
        raise CacheParseError(f"Invalid estimate in cache file: {exc}") from exc


def write_to_file(
    path: Path,
    estimates: Sequence[Estimate],
    options: WriteOptions = WriteOptions(),
) -> None:
    """Replace ``path`` with ``estimates`` serialized as a JSON array.

    An empty sequence is written as the literal ``[]``.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [e.to_cache_dict() for e in estimates]
    with open(path, "w", encoding=options.encoding) as f:
        json.dump(payload, f, indent=options.indent)
    logger.debug("Wrote %d estimates to %s", len(payload), path)
