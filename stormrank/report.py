from __future__ import annotations

"""
stormrank report output
-----------------------
Writes a `StormReport` out in three forms:

- tab-separated tables, one file per era and harm type plus the all-eras
  summaries (same file names as the original analysis outputs);
- two stacked bar charts for the all-eras summaries (matplotlib);
- an optional DOCX report bundling tables, charts and the data-quality audit
  (python-docx).

Chart and DOCX dependencies are imported lazily, so the tables can be
written without them.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
import os
import tempfile

import pandas as pd

from .engine import StormReport
from .models import AggregateRow, CollectionEra


# -----------------------------
# Configuration / citation types
# -----------------------------

@dataclass
class DatasetCitation:
    """Dataset citation metadata for the DOCX report."""
    database_name: str = "Storm Events Database"
    institutional_author: str = "NOAA National Centers for Environmental Information"
    location: str = "Asheville, NC, USA"
    website: str = "https://www.ncdc.noaa.gov/stormevents/"
    directive: str = "NWS Directive 10-1605, Storm Data Preparation"
    file_name: Optional[str] = None


@dataclass
class ReportConfig:
    """Knobs for charts and the DOCX report."""
    title: str = "Severe Weather Harm Report"
    subtitle: str = "Most harmful event types by NWS collection era"
    dataset_name: str = "NOAA Storm Data 1950-2011"
    citation: DatasetCitation = field(default_factory=DatasetCitation)

    # 650 x 650 px at the default dpi
    chart_size_in: Tuple[float, float] = (6.5, 6.5)
    chart_dpi: int = 100

    # Optional: command line used for the run (reproducibility footer)
    command_line: Optional[str] = None


# -----------------------------
# Formatting helpers
# -----------------------------

def format_count(x: float) -> str:
    """Round and insert thousands separators: 1234.4 -> '1,234'."""
    return f"{round(x):,}"


def format_usd(x: float) -> str:
    """Round, insert thousands separators and prefix '$'."""
    return "$" + format_count(x)


def era_span_label(era: CollectionEra, years: Dict[CollectionEra, Tuple[int, int]]) -> str:
    """File-name prefix for an era, e.g. '1950_1954', from the observed years."""
    lo, hi = years[era]
    return f"{lo}_{hi}"


def _span_label(report: StormReport) -> str:
    """Prefix for the all-eras files; never the same as a per-era prefix."""
    span = report.year_span()
    if span is None:
        return "all_eras"
    label = f"{span[0]}_{span[1]}"
    if any(era_span_label(e, report.era_years) == label for e in report.eras):
        label += "_all_eras"
    return label


def _side_by_side(
    left: Sequence[AggregateRow], right: Sequence[AggregateRow], left_fmt, right_fmt
) -> List[List[object]]:
    """Rows of [rank, event, value, event, value]; the shorter side is left blank."""
    out: List[List[object]] = []
    for i in range(max(len(left), len(right))):
        row: List[object] = [i + 1]
        for side, fmt in ((left, left_fmt), (right, right_fmt)):
            if i < len(side):
                row += [side[i].event, fmt(side[i].value)]
            else:
                row += ["", ""]
        out.append(row)
    return out


def _write_tsv(rows: List[List[object]], columns: List[str], path: str) -> str:
    df = pd.DataFrame(rows, columns=columns)
    df.to_csv(path, sep="\t", index=False)
    return path


# -----------------------------
# Delimited tables
# -----------------------------

def write_tables(report: StormReport, out_dir: str) -> List[str]:
    """Write every ranked table as a tab-separated text file. Returns the paths."""
    os.makedirs(out_dir, exist_ok=True)
    n = report.top_n
    written: List[str] = []

    for era in report.eras:
        span = era_span_label(era, report.era_years)
        rows = _side_by_side(report.fatalities.get(era, []), report.injuries.get(era, []),
                             format_count, format_count)
        written.append(_write_tsv(
            rows, ["Rank", "Event", "Total_No_Fatalities", "Event", "Total_No_Injured"],
            os.path.join(out_dir, f"{span}_Top{n}_HarmfulEvents_PopulationHealth.txt"),
        ))
        rows = _side_by_side(report.crop_damage.get(era, []), report.property_damage.get(era, []),
                             format_usd, format_usd)
        written.append(_write_tsv(
            rows, ["Rank", "Event", "Total_Crop_Damages_USD", "Event", "Total_Property_Damages_USD"],
            os.path.join(out_dir, f"{span}_Top{n}_HarmfulEvents_Economically.txt"),
        ))

    span = _span_label(report)
    rows = [[r.rank, r.event, format_count(r.component("fatalities")),
             format_count(r.component("injuries")), format_count(r.value)] for r in report.health]
    written.append(_write_tsv(
        rows, ["Rank", "Event", "Total_No_Fatalities", "Total_No_Injured", "Total_No_Affected"],
        os.path.join(out_dir, f"{span}_Top{n}_HarmfulEvents_PopulationHealth.txt"),
    ))
    rows = [[r.rank, r.event, format_usd(r.component("crop_usd")),
             format_usd(r.component("property_usd")), format_usd(r.value)] for r in report.economic]
    written.append(_write_tsv(
        rows, ["Rank", "Event", "Total_Crop_Damages_USD", "Total_Property_Damages_USD", "Total_Damages_USD"],
        os.path.join(out_dir, f"{span}_Top{n}_HarmfulEvents_Economically.txt"),
    ))
    return written


# -----------------------------
# Charts
# -----------------------------

def _import_plotting():
    try:
        import matplotlib.pyplot as plt
        import numpy as np
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib (and numpy).\n"
            "Install with: python -m pip install matplotlib numpy"
        ) from e
    return plt, np


def write_charts(report: StormReport, out_dir: str, config: Optional[ReportConfig] = None) -> List[str]:
    """Stacked bar charts of the all-eras health and economic tables."""
    config = config or ReportConfig()
    plt, np = _import_plotting()
    os.makedirs(out_dir, exist_ok=True)
    n = report.top_n
    span = _span_label(report)
    written: List[str] = []

    def _stacked(rows: List[AggregateRow], parts: List[Tuple[str, str]], title: str,
                 ylabel: str, legend: str, filename: str) -> None:
        if not rows:
            return
        # smallest total on the left
        ordered = sorted(rows, key=lambda r: (r.value, r.event))
        labels = [r.event for r in ordered]
        plt.figure(figsize=config.chart_size_in)
        bottom = np.zeros(len(ordered))
        for key, label in parts:
            values = np.array([float(r.component(key)) for r in ordered])
            plt.bar(labels, values, bottom=bottom, alpha=0.5, label=label)
            bottom = bottom + values
        plt.xticks(rotation=90)
        plt.title(title, fontweight="bold")
        plt.xlabel("Event Type")
        plt.ylabel(ylabel)
        plt.legend(title=legend)
        plt.tight_layout()
        path = os.path.join(out_dir, filename)
        plt.savefig(path, dpi=config.chart_dpi)
        plt.close()
        written.append(path)

    _stacked(report.health, [("fatalities", "Fatalities"), ("injuries", "Injuries")],
             f"Top {n} Most Harmful Severe Weather Events",
             "Total number of affected individuals", "Harm",
             f"{span}_Top{n}_HarmfulEvents_PersonalHealth.png")
    _stacked(report.economic, [("crop_usd", "Crop"), ("property_usd", "Property")],
             f"Top {n} Economically Costly Severe Weather Events",
             "Total damage in USD", "Damage",
             f"{span}_Top{n}_HarmfulEvents_Economically.png")
    return written


# -----------------------------
# DOCX report
# -----------------------------

def generate_docx_report(
    report: StormReport,
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
    chart_paths: Optional[List[str]] = None,
) -> str:
    """
    Generate a DOCX report from a StormReport.

    If `chart_paths` is None the charts are rendered into a temporary
    directory first.
    """
    config = config or ReportConfig()

    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    if chart_paths is None:
        chart_paths = write_charts(report, tempfile.mkdtemp(prefix="stormrank_report_"), config)

    doc = Document()
    style = doc.styles["Normal"]
    style.font.name = "Calibri"
    style.font.size = Pt(11)

    def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
        p = doc.add_paragraph()
        r = p.add_run(text)
        r.bold = bold
        r.italic = italic
        r.font.size = Pt(size)
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    def _kv(key: str, value: str) -> None:
        p = doc.add_paragraph()
        r = p.add_run(f"{key}: ")
        r.bold = True
        p.add_run(value)

    def _table(header: List[str], rows: List[List[str]]) -> None:
        t = doc.add_table(rows=1, cols=len(header))
        for i, h in enumerate(header):
            t.rows[0].cells[i].text = h
        for row in rows:
            cells = t.add_row().cells
            for i, v in enumerate(row):
                cells[i].text = str(v)

    _center_title(config.title, 22, bold=True)
    _center_title(config.subtitle, 12, italic=True)

    doc.add_paragraph("")
    _kv("Dataset", config.dataset_name)
    span = report.year_span()
    if span is not None:
        _kv("Years covered", f"{span[0]} to {span[1]}")
    _kv("Records ranked", str(report.audit.retained))

    doc.add_heading("Dataset citation", level=1)
    cit = config.citation
    if cit.file_name:
        doc.add_paragraph(f"Data file used: {cit.file_name}")
    doc.add_paragraph(f"{cit.institutional_author}. {cit.database_name}. {cit.location}. {cit.website}.")
    doc.add_paragraph(f"Event types standardised to {cit.directive}.")

    doc.add_heading("Data quality", level=1)
    doc.add_paragraph(
        "Records without a mapped event type, or with an unknown damage multiplier, "
        "do not contribute to the rankings below. They are counted here."
    )
    _table(["Check", "Records"], [[k, f"{v:,}"] for k, v in report.audit.summary().items()])
    top_unmapped = report.audit.unmapped_labels.most_common(10)
    if top_unmapped:
        doc.add_paragraph("")
        doc.add_paragraph("Most frequent unmapped event labels:")
        _table(["Label", "Records"], [[label, f"{c:,}"] for label, c in top_unmapped])

    n = report.top_n
    doc.add_heading("Rankings by collection era", level=1)
    for era in report.eras:
        lo, hi = report.era_years[era]
        doc.add_heading(f"{lo} to {hi}: {era.description}", level=2)
        for caption, rows, fmt in [
            ("fatalities", report.fatalities.get(era, []), format_count),
            ("injuries", report.injuries.get(era, []), format_count),
            ("crop damage (US$)", report.crop_damage.get(era, []), format_usd),
            ("property damage (US$)", report.property_damage.get(era, []), format_usd),
        ]:
            doc.add_paragraph(f"Top {n} event types by {caption}")
            if rows:
                _table(["Rank", "Event", "Total"], [[r.rank, r.event, fmt(r.value)] for r in rows])
            else:
                doc.add_paragraph("No records.")

    doc.add_heading("All eras combined", level=1)
    doc.add_paragraph(f"Top {n} event types by fatalities and injuries")
    _table(["Rank", "Event", "Fatalities", "Injuries", "Total affected"],
           [[r.rank, r.event, format_count(r.component("fatalities")),
             format_count(r.component("injuries")), format_count(r.value)] for r in report.health])
    doc.add_paragraph("")
    doc.add_paragraph(f"Top {n} event types by crop and property damage")
    _table(["Rank", "Event", "Crop (US$)", "Property (US$)", "Total (US$)"],
           [[r.rank, r.event, format_usd(r.component("crop_usd")),
             format_usd(r.component("property_usd")), format_usd(r.value)] for r in report.economic])

    if chart_paths:
        doc.add_heading("Charts", level=1)
        for path in chart_paths:
            doc.add_picture(path, width=Inches(6.0))

    # -----------------------------
    # Reproducibility footer
    # -----------------------------
    doc.add_heading("Reproducibility footer", level=1)
    from . import __version__
    from datetime import datetime as _dt
    doc.add_paragraph(f"stormrank version: {__version__}")
    doc.add_paragraph(f"Report generated at: {_dt.now().isoformat(timespec='seconds')}")
    if config.command_line:
        doc.add_paragraph(f"Command: {config.command_line}")

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    doc.save(out_path)
    return out_path
