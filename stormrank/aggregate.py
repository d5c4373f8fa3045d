"""
Aggregator
==========

Groups normalized records by event (or by event and era), sums a measure and
returns the top-N groups as ranked `AggregateRow` values.

Aggregation is done in two steps so it can run over partitions:

    partial_sums(part)  ->  PartialSums       (map, any partition order)
    merge_partials(...) ->  PartialSums       (key-wise addition)
    rank(partials, n)   ->  [AggregateRow]    (single pass, deterministic)

Ranking rules:
- single measure: value desc, then event name asc;
- combined measure: total desc, first component desc, second component desc,
  then event name asc.

Top-N uses a heap (`heapq.nsmallest` over the composite sort key), so only N
groups are kept sorted.
"""

from __future__ import annotations
import heapq
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .models import AggregateRow, CollectionEra, NormalizedRecord


class Measure(Enum):
    FATALITIES = "fatalities"
    INJURIES = "injuries"
    PROPERTY_USD = "property_usd"
    CROP_USD = "crop_usd"

    def value_of(self, r: NormalizedRecord) -> Optional[float]:
        if self is Measure.FATALITIES:
            return r.fatalities
        if self is Measure.INJURIES:
            return r.injuries
        if self is Measure.PROPERTY_USD:
            return r.property_damage_usd
        return r.crop_damage_usd


@dataclass(frozen=True)
class CombinedMeasure:
    """Sum of two measures, ranked by the total then by each component."""
    name: str
    components: Tuple[Measure, Measure]


HEALTH = CombinedMeasure("total_affected", (Measure.FATALITIES, Measure.INJURIES))
ECONOMIC = CombinedMeasure("total_usd", (Measure.CROP_USD, Measure.PROPERTY_USD))

AnyMeasure = Union[Measure, CombinedMeasure]


class GroupBy(Enum):
    EVENT = "event"
    EVENT_ERA = "event_era"


GroupKey = Tuple[str, Optional[CollectionEra]]


def _components(measure: AnyMeasure) -> Tuple[Measure, ...]:
    if isinstance(measure, CombinedMeasure):
        return measure.components
    return (measure,)


def _group_key(r: NormalizedRecord, group_by: GroupBy) -> GroupKey:
    if group_by is GroupBy.EVENT_ERA:
        return (r.canonical_event, r.era)
    return (r.canonical_event, None)


# ---------------- Map / reduce ----------------

@dataclass
class PartialSums:
    """Per-group sums for one partition of the records.

    A group only appears once at least one record contributed a value to it.
    For a single measure only present values above zero contribute; for a
    combined measure every present component value does, and `rank` drops
    groups whose total is zero. Absent (None) values never contribute, so a
    group made only of unknown damage amounts never shows up as a $0 row.
    """
    group_by: GroupBy
    measure: AnyMeasure
    sums: Dict[GroupKey, Dict[Measure, float]] = field(default_factory=dict)

    def add(self, r: NormalizedRecord) -> None:
        single = not isinstance(self.measure, CombinedMeasure)
        key = None
        for m in _components(self.measure):
            v = m.value_of(r)
            if v is None or (single and v <= 0):
                continue
            if key is None:
                key = _group_key(r, self.group_by)
            group = self.sums.setdefault(key, {})
            group[m] = group.get(m, 0) + v

    def merge(self, other: "PartialSums") -> "PartialSums":
        """Add another partition's sums into this one (in place) and return self."""
        if other.group_by is not self.group_by or other.measure != self.measure:
            raise ValueError("Cannot merge partial sums of different groupings or measures")
        for key, group in other.sums.items():
            mine = self.sums.setdefault(key, {})
            for m, v in group.items():
                mine[m] = mine.get(m, 0) + v
        return self


def partial_sums(records: Iterable[NormalizedRecord], group_by: GroupBy, measure: AnyMeasure) -> PartialSums:
    ps = PartialSums(group_by=group_by, measure=measure)
    for r in records:
        ps.add(r)
    return ps


def merge_partials(parts: Iterable[PartialSums]) -> PartialSums:
    merged: Optional[PartialSums] = None
    for p in parts:
        if merged is None:
            merged = PartialSums(group_by=p.group_by, measure=p.measure)
        merged.merge(p)
    if merged is None:
        raise ValueError("merge_partials needs at least one PartialSums")
    return merged


# ---------------- Ranking ----------------

def _sort_key(event: str, values: Tuple[float, ...]) -> tuple:
    if len(values) == 1:
        return (-values[0], event)
    return (-sum(values),) + tuple(-v for v in values) + (event,)


def rank(partials: PartialSums, top_n: int = 10) -> List[AggregateRow]:
    """Rank merged sums and keep the top N groups (per era for EVENT_ERA).

    Groups whose total is zero are not ranked.
    """
    if top_n < 0:
        raise ValueError("top_n must be >= 0")

    comps = _components(partials.measure)
    buckets: Dict[Optional[CollectionEra], List[Tuple[str, Tuple[float, ...]]]] = {}
    for (event, era), group in partials.sums.items():
        values = tuple(group.get(m, 0) for m in comps)
        if sum(values) <= 0:
            continue
        buckets.setdefault(era, []).append((event, values))

    rows: List[AggregateRow] = []
    for era in sorted(buckets, key=lambda e: 0 if e is None else int(e)):
        top = heapq.nsmallest(top_n, buckets[era], key=lambda item: _sort_key(item[0], item[1]))
        for i, (event, values) in enumerate(top, start=1):
            rows.append(AggregateRow(
                event=event,
                era=era,
                value=sum(values),
                rank=i,
                components=tuple((m.value, v) for m, v in zip(comps, values)),
            ))
    return rows


def aggregate(
    records: Iterable[NormalizedRecord],
    group_by: GroupBy,
    measure: AnyMeasure,
    top_n: int = 10,
) -> List[AggregateRow]:
    """Group, sum, rank and truncate in one call."""
    return rank(partial_sums(records, group_by, measure), top_n=top_n)


def aggregate_partitioned(
    partitions: Iterable[Iterable[NormalizedRecord]],
    group_by: GroupBy,
    measure: AnyMeasure,
    top_n: int = 10,
) -> List[AggregateRow]:
    """Same result as `aggregate` over the concatenated partitions."""
    parts = [partial_sums(p, group_by, measure) for p in partitions]
    if not parts:
        return []
    return rank(merge_partials(parts), top_n=top_n)
