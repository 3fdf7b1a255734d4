"""Domain models for cached footprint estimates.

Pure data structures validated once at the parse boundary. Period math
lives in core/gap_analyzer.py; persistence lives in data/.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class GroupBy(str, Enum):
    """Temporal bucket at which estimates are aggregated and keyed."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


def to_utc_date(value: Any) -> Any:
    """Coerce ISO strings and datetimes to a UTC calendar date.

    '2020-01-01T00:00:00.000Z' → date(2020, 1, 1).  Naive datetimes are
    taken as UTC.  Anything else is handed back for pydantic to validate.
    """
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        value = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


# ---------------------------------------------------------------------------
# Estimates
# ---------------------------------------------------------------------------


class Estimate(BaseModel):
    """Footprint estimate for one period at one grouping.

    ``service_estimates`` is opaque to the cache and stored as-is, as are
    any keys the model does not declare.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    timestamp: date
    service_estimates: list[Any] = Field(alias="serviceEstimates")
    period_start_date: date | None = Field(default=None, alias="periodStartDate")
    period_end_date: date | None = Field(default=None, alias="periodEndDate")
    group_by: GroupBy = Field(alias="groupBy")

    @field_validator("timestamp", "period_start_date", "period_end_date", mode="before")
    @classmethod
    def normalize_dates(cls, v: Any) -> Any:
        return to_utc_date(v)

    @property
    def cache_key(self) -> tuple[date, GroupBy]:
        """Identity of this estimate within one cache file."""
        return (self.timestamp, self.group_by)

    def to_cache_dict(self) -> dict[str, Any]:
        """JSON-ready dict in the on-disk layout (camelCase, no empty bounds)."""
        data = self.model_dump(mode="json", by_alias=True)
        for key in ("periodStartDate", "periodEndDate"):
            if data[key] is None:
                del data[key]
        return data


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class EstimationRequest(BaseModel):
    """Date range a caller wants estimates for."""

    model_config = ConfigDict(populate_by_name=True)

    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    ignore_cache: bool = Field(default=False, alias="ignoreCache")
    group_by: GroupBy = Field(default=GroupBy.DAY, alias="groupBy")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalize_dates(cls, v: Any) -> Any:
        return to_utc_date(v)

    @model_validator(mode="after")
    def check_range(self) -> EstimationRequest:
        if self.start_date > self.end_date:
            raise ValueError(
                f"start date {self.start_date} is after end date {self.end_date}"
            )
        return self
