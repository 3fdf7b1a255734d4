"""Local file-backed estimates cache.

Wraps CacheStore with the in-memory session state the estimation
pipeline needs: what was loaded from disk, and what was just fetched.
"""

from __future__ import annotations

import logging
from datetime import date

from config.settings import settings
from core.gap_analyzer import compute_missing_dates, truncate_to_period
from core.models import Estimate, EstimationRequest, GroupBy
from data.cache_io import WriteOptions
from data.cache_manager import CacheManager
from data.cache_store import CacheStore

logger = logging.getLogger(__name__)


def merge_estimates(
    existing: list[Estimate], incoming: list[Estimate]
) -> list[Estimate]:
    """Union keyed by (timestamp, groupBy); ``incoming`` wins on conflict.

    Result is sorted by timestamp, then grouping.
    """
    merged: dict[tuple[date, GroupBy], Estimate] = {e.cache_key: e for e in existing}
    for e in incoming:
        merged[e.cache_key] = e
    return sorted(merged.values(), key=lambda e: (e.timestamp, e.group_by.value))


class LocalCacheManager(CacheManager):
    """Estimates cache persisted to a single local JSON file.

    Not safe for concurrent writers: ``set_estimates`` is a plain
    read-modify-write of the file.
    """

    def __init__(self, store: CacheStore | None = None) -> None:
        super().__init__()
        self._store = store or CacheStore(
            settings.cache_file,
            WriteOptions(encoding=settings.cache_encoding, indent=settings.cache_indent),
        )

    @property
    def store(self) -> CacheStore:
        return self._store

    def get_estimates(
        self, request: EstimationRequest | None = None
    ) -> list[Estimate]:
        """Cached estimates held in memory, optionally limited to a range."""
        if request is None:
            return list(self.cached_estimates)

        start = truncate_to_period(request.start_date, request.group_by)
        return [
            e
            for e in self.cached_estimates
            if start <= truncate_to_period(e.timestamp, request.group_by) <= request.end_date
        ]

    def get_missing_dates(
        self, request: EstimationRequest, grouping: GroupBy
    ) -> list[date]:
        grouping = GroupBy(grouping)
        if request.ignore_cache:
            # No load; stale in-memory estimates are dropped.
            self.cached_estimates = []
            missing = compute_missing_dates(request, [], grouping)
            logger.info(
                "Ignoring cache: %d %s periods requested", len(missing), grouping.value
            )
            return missing

        self.cached_estimates = self._store.load()
        missing = compute_missing_dates(request, self.cached_estimates, grouping)
        logger.info(
            "%d cached estimates, %d %s periods missing between %s and %s",
            len(self.cached_estimates),
            len(missing),
            grouping.value,
            request.start_date,
            request.end_date,
        )
        return missing

    def set_estimates(self, estimates: list[Estimate], grouping: GroupBy) -> None:
        grouping = GroupBy(grouping)
        existing = self._store.load()
        merged = merge_estimates(existing, estimates)
        self._store.write(merged)

        self.fetched_estimates = list(estimates)
        self.cached_estimates = merged
        logger.info(
            "Cached %d new %s estimates (%d total) in %s",
            len(estimates),
            grouping.value,
            len(merged),
            self._store.path,
        )
