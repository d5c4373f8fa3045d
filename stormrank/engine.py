"""
Core engine
===========

Ties the pipeline together:

1) Ingest raw records -> normalized records + data-quality audit
2) Aggregate normalized records -> ranked tables
3) Bundle the six standard report cuts into a `StormReport`

The six cuts are:
- per era: top-N by fatalities, injuries, crop damage and property damage;
- all eras: top-N by fatalities + injuries and by crop + property damage.
"""

from __future__ import annotations
import csv
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .aggregate import ECONOMIC, HEALTH, AnyMeasure, GroupBy, Measure, aggregate
from .classifier import EventClassifier
from .config import PipelineConfig, UnclassifiedPolicy
from .models import AggregateRow, CollectionEra, NormalizedRecord, RawRecord
from .normalizer import QualityAudit, normalize_partitioned, normalize_records
from .vocabulary import load_vocabulary

logger = logging.getLogger(__name__)

# Unmapped labels listed in the WARN summary
WARN_LABEL_LIMIT = 10


@dataclass
class StormReport:
    """All ranked tables of one run, plus the audit they were computed under."""
    top_n: int
    fatalities: Dict[CollectionEra, List[AggregateRow]]
    injuries: Dict[CollectionEra, List[AggregateRow]]
    crop_damage: Dict[CollectionEra, List[AggregateRow]]
    property_damage: Dict[CollectionEra, List[AggregateRow]]
    health: List[AggregateRow]
    economic: List[AggregateRow]
    audit: QualityAudit
    # (first, last) year observed in each era
    era_years: Dict[CollectionEra, Tuple[int, int]] = field(default_factory=dict)

    @property
    def eras(self) -> List[CollectionEra]:
        return sorted(self.era_years)

    def year_span(self) -> Optional[Tuple[int, int]]:
        if not self.era_years:
            return None
        return (min(y for y, _ in self.era_years.values()),
                max(y for _, y in self.era_years.values()))


def _split_by_era(rows: List[AggregateRow]) -> Dict[CollectionEra, List[AggregateRow]]:
    out: Dict[CollectionEra, List[AggregateRow]] = {}
    for r in rows:
        out.setdefault(r.era, []).append(r)
    return out


@dataclass
class StormEngine:
    """Normalize once, then answer any number of ranking requests."""
    config: PipelineConfig = field(default_factory=PipelineConfig)
    classifier: Optional[EventClassifier] = None
    records: List[NormalizedRecord] = field(default_factory=list)
    audit: QualityAudit = field(default_factory=QualityAudit)

    def __post_init__(self) -> None:
        self.config.validate()
        if self.classifier is None:
            vocab = load_vocabulary(self.config.vocabulary_path) if self.config.vocabulary_path else None
            self.classifier = EventClassifier(vocab)

    # ---------------- Ingestion ----------------
    def ingest(self, raw_records: Iterable[RawRecord]) -> None:
        """Normalize raw records and add them to the engine."""
        cfg = self.config
        if cfg.workers > 1:
            records, audit = normalize_partitioned(
                raw_records, self.classifier, cfg.first_year,
                workers=cfg.workers, chunk_size=cfg.chunk_size,
            )
        else:
            records, audit = normalize_records(raw_records, self.classifier, cfg.first_year)
        self.records.extend(records)
        self.audit.merge(audit)
        self._log_audit(audit)

    def _log_audit(self, audit: QualityAudit) -> None:
        policy = self.config.unclassified_policy
        if policy is UnclassifiedPolicy.SILENT:
            return
        s = audit.summary()
        msg = ("Normalized %d records: %d retained, %d without harm, %d unclassified "
               "(%d distinct labels), %d malformed, %d/%d unresolved property/crop multipliers")
        args = (s["records_seen"], s["retained"], s["no_harm"], s["unclassified"],
                s["distinct_unmapped_labels"], s["malformed"],
                s["unresolved_property_multiplier"], s["unresolved_crop_multiplier"])
        if policy is UnclassifiedPolicy.WARN and audit.unclassified:
            logger.warning(msg, *args)
            for label, n in audit.unmapped_labels.most_common(WARN_LABEL_LIMIT):
                logger.warning("Unmapped event label %r: %d records dropped", label, n)
        else:
            logger.info(msg, *args)

    # ---------------- Queries ----------------
    def top(self, measure: AnyMeasure, era: Optional[CollectionEra] = None,
            top_n: Optional[int] = None) -> List[AggregateRow]:
        """Top-N groups for a measure, for one era or all eras combined."""
        n = self.config.top_n if top_n is None else top_n
        if era is None:
            return aggregate(self.records, GroupBy.EVENT, measure, top_n=n)
        return aggregate((r for r in self.records if r.era is era), GroupBy.EVENT_ERA, measure, top_n=n)

    def era_years(self) -> Dict[CollectionEra, Tuple[int, int]]:
        out: Dict[CollectionEra, Tuple[int, int]] = {}
        for r in self.records:
            lo, hi = out.get(r.era, (r.year, r.year))
            out[r.era] = (min(lo, r.year), max(hi, r.year))
        return out

    def build_report(self, top_n: Optional[int] = None) -> StormReport:
        n = self.config.top_n if top_n is None else top_n

        def per_era(measure: Measure) -> Dict[CollectionEra, List[AggregateRow]]:
            return _split_by_era(aggregate(self.records, GroupBy.EVENT_ERA, measure, top_n=n))

        return StormReport(
            top_n=n,
            fatalities=per_era(Measure.FATALITIES),
            injuries=per_era(Measure.INJURIES),
            crop_damage=per_era(Measure.CROP_USD),
            property_damage=per_era(Measure.PROPERTY_USD),
            health=self.top(HEALTH, top_n=n),
            economic=self.top(ECONOMIC, top_n=n),
            audit=self.audit,
            era_years=self.era_years(),
        )

    # ---------------- Export ----------------
    def export_csv(self, path: str) -> None:
        """Write the normalized records (one row each) to CSV."""
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(["canonical_event", "era", "year", "fatalities", "injuries",
                        "property_damage_usd", "crop_damage_usd"])
            for r in self.records:
                w.writerow([r.canonical_event, int(r.era), r.year, r.fatalities, r.injuries,
                            "" if r.property_damage_usd is None else r.property_damage_usd,
                            "" if r.crop_damage_usd is None else r.crop_damage_usd])
