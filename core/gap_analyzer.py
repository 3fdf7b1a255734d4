"""Period math and cache gap detection.

Works out which periods of a requested range have no cached estimate.
Pure functions: no I/O, no logging of cache contents.

Period boundaries follow calendar conventions:
    day      the date itself
    week     the preceding Sunday
    month    first of the month
    quarter  first day of Jan/Apr/Jul/Oct
    year     January 1st
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from core.models import Estimate, EstimationRequest, GroupBy


def truncate_to_period(day: date, grouping: GroupBy) -> date:
    """Start of the ``grouping`` period that contains ``day``."""
    match GroupBy(grouping):
        case GroupBy.DAY:
            return day
        case GroupBy.WEEK:
            # weekday(): Monday=0 ... Sunday=6
            return day - timedelta(days=(day.weekday() + 1) % 7)
        case GroupBy.MONTH:
            return day.replace(day=1)
        case GroupBy.QUARTER:
            return date(day.year, 3 * ((day.month - 1) // 3) + 1, 1)
        case GroupBy.YEAR:
            return date(day.year, 1, 1)


def next_period(boundary: date, grouping: GroupBy) -> date:
    """Advance a period boundary by one unit of ``grouping``.

    ``boundary`` is expected to be truncated already; month-based steps
    keep the day-of-month at 1.
    """
    match GroupBy(grouping):
        case GroupBy.DAY:
            return boundary + timedelta(days=1)
        case GroupBy.WEEK:
            return boundary + timedelta(weeks=1)
        case GroupBy.MONTH:
            return _add_months(boundary, 1)
        case GroupBy.QUARTER:
            return _add_months(boundary, 3)
        case GroupBy.YEAR:
            return boundary.replace(year=boundary.year + 1)


def _add_months(boundary: date, months: int) -> date:
    index = boundary.month - 1 + months
    return boundary.replace(year=boundary.year + index // 12, month=index % 12 + 1)


def enumerate_periods(start: date, end: date, grouping: GroupBy) -> list[date]:
    """Every period boundary from ``start`` to ``end`` inclusive, ascending.

    The first boundary is ``start`` truncated to the grouping, so a range
    inside a single period yields exactly one boundary.
    """
    periods: list[date] = []
    current = truncate_to_period(start, grouping)
    while current <= end:
        periods.append(current)
        current = next_period(current, grouping)
    return periods


def compute_missing_dates(
    request: EstimationRequest,
    cached: Iterable[Estimate],
    grouping: GroupBy,
) -> list[date]:
    """Requested period boundaries that have no cached estimate.

    Args:
        request: Requested range.  With ``ignore_cache`` set the whole
            range is returned and ``cached`` is never read.
        cached: Estimates currently in the cache.
        grouping: Granularity to enumerate and compare at.

    Returns:
        Missing boundaries in ascending order.
    """
    requested = enumerate_periods(request.start_date, request.end_date, grouping)
    if request.ignore_cache:
        return requested

    cached_periods = {truncate_to_period(e.timestamp, grouping) for e in cached}
    return [d for d in requested if d not in cached_periods]
