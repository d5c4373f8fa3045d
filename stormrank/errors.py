"""
Errors
======

Record-level problems (a bad date, a year before the record starts) are raised
as `MalformedRecord` subclasses. The batch functions catch them per record, so
one bad row never stops the rest of the dataset from being aggregated.

Unresolvable multipliers and unclassified labels are *not* exceptions: they
are ordinary outcomes that the `QualityAudit` counts.
"""


class StormRankError(Exception):
    """Base class for all stormrank errors."""


class MalformedRecord(StormRankError, ValueError):
    """A single source record cannot be normalized."""


class MalformedDate(MalformedRecord):
    """Begin date is missing, unparsable, or has a non-integer year."""


class OutOfRangeYear(MalformedRecord):
    """Year falls before the first year of the Storm Database."""


class VocabularyError(StormRankError, ValueError):
    """An event vocabulary file has the wrong shape or unknown categories."""


class MissingColumn(StormRankError, ValueError):
    """The source CSV lacks a column the analysis needs."""
