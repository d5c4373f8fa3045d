"""
stormrank Command Line Interface (CLI)
======================================

Run the whole analysis:

    stormrank run --data-dir data --out results
    stormrank run --csv repdata_data_StormData.csv.bz2 --top 5 --docx results/report.docx

Inspect the event vocabulary:

    stormrank classify "TSTM WIND (G45)" "hail 075"
    stormrank unmapped --csv repdata_data_StormData.csv.bz2 --limit 30
    stormrank vocabulary --export vocabulary.json

The CLI never modifies the source file. It reads it once, and writes tables,
charts and reports into the output directory.
"""

from __future__ import annotations
import argparse
import logging
import os
import sys
from typing import List, Optional

import requests

from .classifier import EventClassifier
from .config import PipelineConfig, UnclassifiedPolicy
from .engine import StormEngine, StormReport
from .errors import StormRankError
from .fetch import ensure_storm_data
from .loader import iter_storm_records
from .models import AggregateRow
from .normalizer import normalize_records
from .vocabulary import EVENT_SYNONYMS, dump_vocabulary, load_vocabulary

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="stormrank", description="Rank severe weather events by harm.")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Normalize, aggregate and write the ranked tables")
    src = run.add_mutually_exclusive_group(required=True)
    src.add_argument("--csv", help="Path to the Storm Data CSV (.csv or .csv.bz2)")
    src.add_argument("--data-dir", help="Directory holding the Storm Data file (downloaded if missing)")
    run.add_argument("--out", default="results", help="Output directory (default: results)")
    run.add_argument("--top", type=int, default=10, help="Rows per ranked table (default: 10)")
    run.add_argument("--unclassified", choices=[p.value for p in UnclassifiedPolicy],
                     default=UnclassifiedPolicy.COUNT.value,
                     help="How to report records with unmapped event labels")
    run.add_argument("--workers", type=int, default=1, help="Threads for normalization (default: 1)")
    run.add_argument("--nrows", type=int, default=None, help="Only read the first N rows")
    run.add_argument("--vocabulary", help="Alternate vocabulary JSON file")
    run.add_argument("--no-charts", action="store_true", help="Skip the PNG charts")
    run.add_argument("--docx", help="Also write a DOCX report to this path")
    run.add_argument("--export-records", help="Also write the normalized records to this CSV")

    cls = sub.add_parser("classify", help="Show the canonical event for raw labels")
    cls.add_argument("labels", nargs="+")
    cls.add_argument("--vocabulary", help="Alternate vocabulary JSON file")

    unm = sub.add_parser("unmapped", help="List event labels that match no category")
    unm.add_argument("--csv", required=True, help="Path to the Storm Data CSV")
    unm.add_argument("--limit", type=int, default=50)
    unm.add_argument("--vocabulary", help="Alternate vocabulary JSON file")

    voc = sub.add_parser("vocabulary", help="Export the built-in vocabulary")
    voc.add_argument("--export", required=True, help="Output JSON path")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the stormrank CLI. Returns the process exit code."""
    ap = build_parser()
    try:
        args = ap.parse_args(argv)
    except SystemExit as e:
        # argparse exits 2 on usage errors and 0 after --help
        return e.code if isinstance(e.code, int) else 2
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    try:
        return handle(args, argv)
    except (StormRankError, OSError, requests.RequestException) as e:
        print(f"Error: {e}")
        return 1


def handle(args: argparse.Namespace, argv: Optional[List[str]] = None) -> int:
    """Dispatch one parsed command."""
    if args.command == "run":
        return _run(args, argv)

    if args.command == "classify":
        classifier = _classifier(args.vocabulary)
        for label in args.labels:
            event = classifier.classify(label)
            print(f"{label!r} -> {event if event is not None else '(unclassified)'}")
        return 0

    if args.command == "unmapped":
        _, audit = normalize_records(iter_storm_records(args.csv), _classifier(args.vocabulary))
        print(f"{audit.unclassified} records dropped, {len(audit.unmapped_labels)} distinct labels:")
        for label, n in audit.unmapped_labels.most_common(args.limit):
            print(f"{n:8d}  {label!r}")
        return 0

    if args.command == "vocabulary":
        dump_vocabulary(EVENT_SYNONYMS, args.export)
        print(f"Vocabulary written to {args.export}")
        return 0

    print("Unknown command. Use --help.")
    return 2


def _classifier(vocabulary_path: Optional[str]) -> EventClassifier:
    return EventClassifier(load_vocabulary(vocabulary_path) if vocabulary_path else None)


def _run(args: argparse.Namespace, argv: Optional[List[str]]) -> int:
    from .report import DatasetCitation, ReportConfig, generate_docx_report, write_charts, write_tables

    if args.top < 0 or args.workers < 1:
        print("--top must be >= 0 and --workers >= 1")
        return 2

    config = PipelineConfig(
        top_n=args.top,
        unclassified_policy=UnclassifiedPolicy(args.unclassified),
        workers=args.workers,
        vocabulary_path=args.vocabulary,
    )
    path = args.csv if args.csv else ensure_storm_data(args.data_dir)
    logger.debug("Run config: %s", config)

    print(f"Loading {path} ...")
    engine = StormEngine(config=config)
    engine.ingest(iter_storm_records(path, nrows=args.nrows))
    report = engine.build_report()
    _print_report(report)

    written = write_tables(report, args.out)
    report_cfg = ReportConfig(
        citation=DatasetCitation(file_name=os.path.basename(path)),
        command_line="stormrank " + " ".join(argv if argv is not None else sys.argv[1:]),
    )
    charts: List[str] = []
    if not args.no_charts:
        charts = write_charts(report, args.out, report_cfg)
        written.extend(charts)
    if args.docx:
        written.append(generate_docx_report(report, args.docx, config=report_cfg, chart_paths=charts))
    if args.export_records:
        engine.export_csv(args.export_records)
        written.append(args.export_records)

    for p in written:
        print(f"Wrote {p}")
    return 0


def _print_rows(title: str, rows: List[AggregateRow]) -> None:
    print(title)
    if not rows:
        print("  (no records)")
    for r in rows:
        print(f"  {r.rank:2d}. {r.event:<28} {r.value:,.0f}")


def _print_report(report: StormReport) -> None:
    n = report.top_n
    for era in report.eras:
        lo, hi = report.era_years[era]
        print(f"\n== {lo}-{hi}: {era.description} ==")
        _print_rows(f"Top {n} by fatalities", report.fatalities.get(era, []))
        _print_rows(f"Top {n} by injuries", report.injuries.get(era, []))
        _print_rows(f"Top {n} by crop damage (US$)", report.crop_damage.get(era, []))
        _print_rows(f"Top {n} by property damage (US$)", report.property_damage.get(era, []))
    print("\n== All eras ==")
    _print_rows(f"Top {n} by fatalities + injuries", report.health)
    _print_rows(f"Top {n} by crop + property damage (US$)", report.economic)
    print("\nData quality:")
    for k, v in report.audit.summary().items():
        print(f"  {k}: {v:,}")


if __name__ == "__main__":
    sys.exit(main())
