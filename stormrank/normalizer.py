"""
Record normalizer
=================

Turns one `RawRecord` into a `NormalizedRecord` or a `Dropped` marker:

1) drop records with no fatalities, injuries or damage (before anything else,
   so totals match the reference tables);
2) find the collection era from the begin year;
3) apply known data-entry corrections to the property exponent code;
4) scale property and crop damage to US$ (None if no multiplier);
5) classify the event label; unmapped labels are dropped.

`normalize` is pure. The batch helpers add a `QualityAudit` so the records
lost on the way (unmapped labels, unknown multipliers, bad dates) stay
visible instead of disappearing from the tables without a trace.
"""

from __future__ import annotations
import logging
from collections import Counter, deque
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterable, List, Optional, Tuple, Union

from .classifier import EventClassifier, normalize_label
from .eras import FIRST_RECORD_YEAR, era_of
from .errors import MalformedDate, MalformedRecord
from .models import Dropped, DropReason, NormalizedRecord, RawRecord
from .multipliers import correct_exponent_code, damage_usd

logger = logging.getLogger(__name__)

NormalizeResult = Union[NormalizedRecord, Dropped]

# Number of malformed-record diagnostics kept on the audit.
MAX_MALFORMED_EXAMPLES = 20

# Chunks submitted ahead of collection, per worker thread.
CHUNKS_IN_FLIGHT_PER_WORKER = 2


def resolve_damages(raw: RawRecord) -> Tuple[Optional[float], Optional[float]]:
    """Return (property_usd, crop_usd) for a record, corrections applied."""
    prop_code = correct_exponent_code(
        raw.begin_date, raw.property_damage_amount, raw.property_damage_exponent_code
    )
    return (
        damage_usd(raw.property_damage_amount, prop_code),
        damage_usd(raw.crop_damage_amount, raw.crop_damage_exponent_code),
    )


def normalize(
    raw: RawRecord,
    classifier: EventClassifier,
    first_year: int = FIRST_RECORD_YEAR,
) -> NormalizeResult:
    """Normalize one record.

    Raises MalformedDate / OutOfRangeYear for records whose year cannot be
    placed in an era.
    """
    if not raw.has_harm():
        return Dropped(DropReason.NO_HARM)

    if raw.begin_date is None:
        raise MalformedDate(f"Missing or unparsable begin date (event {raw.raw_event_label!r})")
    year = raw.begin_date.year
    era = era_of(year, first_year=first_year)

    prop_usd, crop_usd = resolve_damages(raw)

    event = classifier.classify(raw.raw_event_label)
    if event is None:
        return Dropped(DropReason.UNCLASSIFIED, normalize_label(raw.raw_event_label))

    return NormalizedRecord(
        canonical_event=event,
        era=era,
        year=year,
        fatalities=raw.fatalities,
        injuries=raw.injuries,
        property_damage_usd=prop_usd,
        crop_damage_usd=crop_usd,
    )


# -----------------------------
# Data-quality audit
# -----------------------------

@dataclass
class QualityAudit:
    """Counts of what happened to each record during normalization."""
    records_seen: int = 0
    no_harm: int = 0
    malformed: int = 0
    unclassified: int = 0
    retained: int = 0
    # nonzero amount, but the exponent code gave no multiplier
    unresolved_property: int = 0
    unresolved_crop: int = 0
    unmapped_labels: Counter = field(default_factory=Counter)
    malformed_examples: List[str] = field(default_factory=list)

    def observe(self, raw: RawRecord, result: NormalizeResult) -> None:
        self.records_seen += 1
        if isinstance(result, Dropped) and result.reason is DropReason.NO_HARM:
            self.no_harm += 1
            return

        if isinstance(result, NormalizedRecord):
            prop_usd, crop_usd = result.property_damage_usd, result.crop_damage_usd
        else:
            prop_usd, crop_usd = resolve_damages(raw)
        if prop_usd is None and raw.property_damage_amount != 0:
            self.unresolved_property += 1
        if crop_usd is None and raw.crop_damage_amount != 0:
            self.unresolved_crop += 1

        if isinstance(result, Dropped):
            self.unclassified += 1
            self.unmapped_labels[result.detail] += 1
        else:
            self.retained += 1

    def observe_malformed(self, err: MalformedRecord) -> None:
        self.records_seen += 1
        self.malformed += 1
        if len(self.malformed_examples) < MAX_MALFORMED_EXAMPLES:
            self.malformed_examples.append(str(err))

    def merge(self, other: "QualityAudit") -> "QualityAudit":
        """Add another audit's counts into this one (in place) and return self."""
        self.records_seen += other.records_seen
        self.no_harm += other.no_harm
        self.malformed += other.malformed
        self.unclassified += other.unclassified
        self.retained += other.retained
        self.unresolved_property += other.unresolved_property
        self.unresolved_crop += other.unresolved_crop
        self.unmapped_labels.update(other.unmapped_labels)
        room = MAX_MALFORMED_EXAMPLES - len(self.malformed_examples)
        if room > 0:
            self.malformed_examples.extend(other.malformed_examples[:room])
        return self

    def summary(self) -> Dict[str, int]:
        return {
            "records_seen": self.records_seen,
            "no_harm": self.no_harm,
            "malformed": self.malformed,
            "unclassified": self.unclassified,
            "distinct_unmapped_labels": len(self.unmapped_labels),
            "unresolved_property_multiplier": self.unresolved_property,
            "unresolved_crop_multiplier": self.unresolved_crop,
            "retained": self.retained,
        }


# -----------------------------
# Batch normalization
# -----------------------------

def normalize_records(
    raw_records: Iterable[RawRecord],
    classifier: EventClassifier,
    first_year: int = FIRST_RECORD_YEAR,
) -> Tuple[List[NormalizedRecord], QualityAudit]:
    """Normalize a batch sequentially. Malformed records are logged and skipped."""
    out: List[NormalizedRecord] = []
    audit = QualityAudit()
    for raw in raw_records:
        try:
            result = normalize(raw, classifier, first_year=first_year)
        except MalformedRecord as e:
            logger.warning("Rejected record: %s", e)
            audit.observe_malformed(e)
            continue
        audit.observe(raw, result)
        if isinstance(result, NormalizedRecord):
            out.append(result)
    return out, audit


def _chunks(raw_records: Iterable[RawRecord], chunk_size: int) -> Iterable[List[RawRecord]]:
    chunk: List[RawRecord] = []
    for raw in raw_records:
        chunk.append(raw)
        if len(chunk) >= chunk_size:
            yield chunk
            chunk = []
    if chunk:
        yield chunk


def normalize_partitioned(
    raw_records: Iterable[RawRecord],
    classifier: EventClassifier,
    first_year: int = FIRST_RECORD_YEAR,
    workers: int = 4,
    chunk_size: int = 50_000,
) -> Tuple[List[NormalizedRecord], QualityAudit]:
    """Normalize chunks of the input concurrently.

    Records come back in input order and the chunk audits are merged, so the
    result is the same as `normalize_records` on the whole input. The input is
    read lazily: only a few chunks per worker are held in memory at a time.
    """
    if workers < 1:
        raise ValueError("workers must be >= 1")
    if chunk_size < 1:
        raise ValueError("chunk_size must be >= 1")

    out: List[NormalizedRecord] = []
    audit = QualityAudit()
    n_chunks = 0

    def collect(future) -> None:
        records, part_audit = future.result()
        out.extend(records)
        audit.merge(part_audit)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        # at most `window` chunks are read ahead; results are collected in
        # submission order to keep the input order
        window = workers * CHUNKS_IN_FLIGHT_PER_WORKER
        pending: Deque[Future] = deque()
        for chunk in _chunks(raw_records, chunk_size):
            pending.append(executor.submit(normalize_records, chunk, classifier, first_year))
            n_chunks += 1
            if len(pending) >= window:
                collect(pending.popleft())
        while pending:
            collect(pending.popleft())
    logger.debug("Normalized %d chunks on %d workers", n_chunks, workers)
    return out, audit
