#!/usr/bin/env python3
"""Print the periods missing from the local estimates cache.

Useful before a long estimation run to see how much will be recomputed:

    python scripts/show_missing_dates.py 2024-01-01 2024-03-31 --group-by week

The cache file comes from FOOTPRINT_CACHE_FILE (default
estimates.cache.json).  A missing file is created empty.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import settings
from core.models import EstimationRequest, GroupBy
from data.cache import LocalCacheManager

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)

parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
parser.add_argument("start_date")
parser.add_argument("end_date")
parser.add_argument(
    "--group-by",
    choices=[g.value for g in GroupBy],
    default=settings.default_group_by.value,
)
args = parser.parse_args()

grouping = GroupBy(args.group_by)
request = EstimationRequest(
    start_date=args.start_date,
    end_date=args.end_date,
    group_by=grouping,
)

cache = LocalCacheManager()
missing = cache.get_missing_dates(request, grouping)
print(f"Cache file: {cache.store.path}")
print(f"Cached estimates: {len(cache.get_estimates())}")
print(f"Missing {grouping.value} periods: {len(missing)}")
for d in missing:
    print(f"  {d.isoformat()}")
