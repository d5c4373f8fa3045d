"""
Dataset loader (Storm Data CSV -> RawRecord stream)
===================================================

Reads the NOAA Storm Data CSV (plain or .bz2) and converts each row into a
`RawRecord`.

Key ideas:
- Only the eight columns the analysis needs are read, and the file is read in
  chunks, so the 900k-row file never has to sit in memory as one DataFrame.
- Column names are matched tolerantly (exact, then ignoring case/punctuation).
- Conversion helpers (_to_int/_to_float/_to_str) turn blanks into 0 / "".
- Unparsable dates become None; the normalizer rejects those records later
  with a proper diagnostic.
"""

from __future__ import annotations
from datetime import date
from typing import Iterator, List, Optional
import re

import pandas as pd

from .errors import MissingColumn
from .models import RawRecord

DATE_FORMAT = "%m/%d/%Y %H:%M:%S"

# logical field -> accepted column names
COLUMNS = {
    "begin_date": ("BGN_DATE", "BEGIN_DATE", "BGNDATE"),
    "event": ("EVTYPE", "EVENT_TYPE"),
    "fatalities": ("FATALITIES",),
    "injuries": ("INJURIES",),
    "prop_amount": ("PROPDMG",),
    "prop_code": ("PROPDMGEXP",),
    "crop_amount": ("CROPDMG",),
    "crop_code": ("CROPDMGEXP",),
}


def _to_int(x) -> int:
    """Convert a cell to int, 0 if missing/invalid."""
    if pd.isna(x): return 0
    try: return int(float(x))
    except (TypeError, ValueError): return 0


def _to_float(x) -> float:
    """Convert a cell to float, 0.0 if missing/invalid."""
    if pd.isna(x): return 0.0
    try: return float(x)
    except (TypeError, ValueError): return 0.0


def _to_str(x) -> str:
    if pd.isna(x): return ""
    return str(x).strip()


def _to_date(x) -> Optional[date]:
    if pd.isna(x): return None
    return x.date()


def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", str(s).lower())


def _col(columns: List[str], *names: str) -> str:
    for n in names:
        if n in columns:
            return n
    norm_map = {_norm(c): c for c in columns}
    for n in names:
        nn = _norm(n)
        if nn in norm_map:
            return norm_map[nn]
    raise MissingColumn(f"Missing required column. Tried={names}. Available={columns}")


def _resolve_columns(path: str) -> dict:
    header = pd.read_csv(path, nrows=0)
    columns = [str(c) for c in header.columns]
    return {field: _col(columns, *names) for field, names in COLUMNS.items()}


def iter_storm_records(path: str, chunksize: int = 100_000, nrows: Optional[int] = None) -> Iterator[RawRecord]:
    """Lazily yield RawRecords from a Storm Data CSV.

    Compression is inferred from the file name, so the original
    `repdata_data_StormData.csv.bz2` can be read directly.
    """
    cols = _resolve_columns(path)
    reader = pd.read_csv(
        path,
        usecols=list(cols.values()),
        dtype={cols["event"]: str, cols["prop_code"]: str, cols["crop_code"]: str, cols["begin_date"]: str},
        keep_default_na=False,
        na_values=[""],
        skipinitialspace=True,
        chunksize=chunksize,
        nrows=nrows,
    )
    for chunk in reader:
        dates = pd.to_datetime(chunk[cols["begin_date"]], format=DATE_FORMAT, errors="coerce")
        for bgn, evtype, fat, inj, pdmg, pexp, cdmg, cexp in zip(
            dates,
            chunk[cols["event"]],
            chunk[cols["fatalities"]],
            chunk[cols["injuries"]],
            chunk[cols["prop_amount"]],
            chunk[cols["prop_code"]],
            chunk[cols["crop_amount"]],
            chunk[cols["crop_code"]],
        ):
            yield RawRecord(
                begin_date=_to_date(bgn),
                raw_event_label=_to_str(evtype),
                fatalities=_to_int(fat),
                injuries=_to_int(inj),
                property_damage_amount=_to_float(pdmg),
                property_damage_exponent_code=_to_str(pexp),
                crop_damage_amount=_to_float(cdmg),
                crop_damage_exponent_code=_to_str(cexp),
            )


def load_storm_csv(path: str, nrows: Optional[int] = None) -> List[RawRecord]:
    """Load a whole Storm Data CSV into a list of RawRecords."""
    return list(iter_storm_records(path, nrows=nrows))
