"""Shared test fixtures for the footprint estimates cache."""

from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

import pytest

from core.models import Estimate, EstimationRequest, GroupBy
from data.cache import LocalCacheManager
from data.cache_store import CacheStore


@pytest.fixture
def make_estimates():
    """Factory: ``count`` consecutive daily estimates starting at ``start``."""

    def _make(start: str, count: int, group_by: GroupBy = GroupBy.DAY) -> list[Estimate]:
        first = date.fromisoformat(start)
        return [
            Estimate(
                timestamp=first + timedelta(days=i),
                service_estimates=[],
                group_by=group_by,
            )
            for i in range(count)
        ]

    return _make


@pytest.fixture
def sample_request() -> EstimationRequest:
    """Two-day request used by the cache scenarios."""
    return EstimationRequest(
        start_date=date(2022, 1, 1),
        end_date=date(2022, 1, 2),
        group_by=GroupBy.DAY,
    )


@pytest.fixture
def cache_path(tmp_path) -> Path:
    """Cache file location inside a temp dir (file not created)."""
    return tmp_path / "estimates.cache.json"


@pytest.fixture
def store(cache_path) -> CacheStore:
    return CacheStore(cache_path)


@pytest.fixture
def cache_manager(store) -> LocalCacheManager:
    """Fresh per-test cache session backed by a temp file."""
    return LocalCacheManager(store)
