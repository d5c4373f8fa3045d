"""
Data model
==========

Each row of the Storm Data CSV becomes a `RawRecord`. The normalizer turns a
retained record into a `NormalizedRecord` (or a `Dropped` marker), and the
aggregator produces `AggregateRow` values.

Everything here is frozen: records are never edited after loading, and every
aggregation request builds fresh rows.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from enum import Enum, IntEnum
from typing import Optional, Tuple


@dataclass(frozen=True)
class RawRecord:
    """One Storm Data row, reduced to the eight fields the analysis uses."""
    begin_date: Optional[date]
    raw_event_label: str
    fatalities: int = 0
    injuries: int = 0
    property_damage_amount: float = 0.0
    property_damage_exponent_code: str = ""
    crop_damage_amount: float = 0.0
    crop_damage_exponent_code: str = ""

    def has_harm(self) -> bool:
        """True if any of the four harm measures is nonzero."""
        return (self.fatalities != 0 or self.injuries != 0
                or self.property_damage_amount != 0 or self.crop_damage_amount != 0)


class CollectionEra(IntEnum):
    """NWS data-collection periods.

    The set of event types that were recorded changed twice, so rankings are
    only comparable within one era.
    """
    ERA1 = 1
    ERA2 = 2
    ERA3 = 3

    @property
    def first_year(self) -> int:
        return _ERA_FIRST_YEAR[self]

    @property
    def description(self) -> str:
        return _ERA_DESCRIPTION[self]


_ERA_FIRST_YEAR = {
    CollectionEra.ERA1: 1950,
    CollectionEra.ERA2: 1955,
    CollectionEra.ERA3: 1996,
}

_ERA_DESCRIPTION = {
    CollectionEra.ERA1: "Tornado events only",
    CollectionEra.ERA2: "Tornado, thunderstorm wind and hail events",
    CollectionEra.ERA3: "All 48 NWS Directive 10-1605 event types",
}


@dataclass(frozen=True)
class NormalizedRecord:
    """A retained record after era, multiplier and event resolution.

    Damage in US$ is None when the exponent code gave no multiplier. None is
    "unknown", which is not the same thing as a recorded $0.
    """
    canonical_event: str
    era: CollectionEra
    year: int
    fatalities: int
    injuries: int
    property_damage_usd: Optional[float]
    crop_damage_usd: Optional[float]


class DropReason(Enum):
    NO_HARM = "no_harm"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class Dropped:
    """Marker returned by the normalizer for records that are not aggregated."""
    reason: DropReason
    detail: str = ""


@dataclass(frozen=True)
class AggregateRow:
    """One ranked group of an aggregate table.

    `value` is the summed measure used for ranking. For combined measures it is
    the sum of `components`, which holds (measure name, summed value) pairs.
    """
    event: str
    era: Optional[CollectionEra]
    value: float
    rank: int
    components: Tuple[Tuple[str, float], ...] = ()

    def component(self, name: str) -> float:
        """Return a component sum by measure name (e.g. 'fatalities')."""
        for key, v in self.components:
            if key == name:
                return v
        raise KeyError(name)
