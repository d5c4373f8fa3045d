"""
Collection eras
===============

The NWS changed what it recorded twice:

1) 1950 through 1954: tornado events only.
2) 1955 through 1995: tornado, thunderstorm wind and hail events.
3) 1996 onwards: all 48 NWS Directive 10-1605 event types.

Rankings mix very different populations across these boundaries, so every
per-era table is computed separately.
"""

from __future__ import annotations
from .errors import MalformedDate, OutOfRangeYear
from .models import CollectionEra

# First year of the NWS Storm Database.
FIRST_RECORD_YEAR = 1950


def era_of(year: int, first_year: int = FIRST_RECORD_YEAR) -> CollectionEra:
    """Return the collection era for a year.

    Raises MalformedDate for a non-integer year and OutOfRangeYear for a year
    before `first_year`. There is no fallback era.
    """
    if isinstance(year, bool) or not isinstance(year, int):
        raise MalformedDate(f"Year must be an integer, got {year!r}")
    if year < first_year:
        raise OutOfRangeYear(f"Year {year} is before the first recorded year {first_year}")
    if year < CollectionEra.ERA2.first_year:
        return CollectionEra.ERA1
    if year < CollectionEra.ERA3.first_year:
        return CollectionEra.ERA2
    return CollectionEra.ERA3
