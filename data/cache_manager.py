"""Estimates cache abstraction.

Defines the interface every estimates cache implements.  The estimation
pipeline asks the cache which periods are missing, fetches only those,
then hands the fresh estimates back for persistence.

Three capabilities:
    1. Read what is cached (no I/O)
    2. Report missing periods for a request
    3. Merge and persist freshly fetched estimates
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from core.models import Estimate, EstimationRequest, GroupBy


class CacheManager(ABC):
    """Base class for estimates caches.

    Instances hold per-session state and are passed explicitly to
    whatever needs them; nothing is kept at module level.
    """

    def __init__(self) -> None:
        self.cached_estimates: list[Estimate] = []
        self.fetched_estimates: list[Estimate] = []

    @abstractmethod
    def get_estimates(
        self, request: EstimationRequest | None = None
    ) -> list[Estimate]:
        """Return estimates already held in memory.

        Never touches storage; call ``get_missing_dates`` first to prime
        the in-memory copy.
        """
        ...

    @abstractmethod
    def get_missing_dates(
        self, request: EstimationRequest, grouping: GroupBy
    ) -> list[date]:
        """Return period boundaries in ``request`` with no cached estimate.

        A missing or damaged cache degrades to "everything is missing";
        it never raises for those conditions.
        """
        ...

    @abstractmethod
    def set_estimates(self, estimates: list[Estimate], grouping: GroupBy) -> None:
        """Merge ``estimates`` into the cache and persist the result.

        Afterwards ``fetched_estimates`` is exactly ``estimates``.
        """
        ...
