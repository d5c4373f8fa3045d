"""
Damage multipliers
==================

Storm Data stores damage as a magnitude (PROPDMG / CROPDMG) plus a one
character exponent code (PROPDMGEXP / CROPDMGEXP). This module turns the code
into a dollar multiplier.

Codes that carry no usable scale ("", "0", "?", "-", "+", anything unknown)
resolve to None. Callers must keep None as "unknown damage": treating it as 0
would silently understate the totals.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional, Tuple

# Codes with a real multiplier. Everything else resolves to None.
MULTIPLIERS: Dict[str, float] = {
    "1": 10.0 ** 1,
    "2": 10.0 ** 2,
    "3": 10.0 ** 3,
    "4": 10.0 ** 4,
    "5": 10.0 ** 5,
    "6": 10.0 ** 6,
    "7": 10.0 ** 7,
    "8": 10.0 ** 8,
    "9": 10.0 ** 9,
    "H": 10.0 ** 2,
    "K": 10.0 ** 3,
    "M": 10.0 ** 6,
    "B": 10.0 ** 9,
}

# Codes seen in the source that deliberately have no multiplier.
NO_SCALE_CODES = ("", "NA", "0", "?", "-", "+")


def _clean_code(code: Optional[str]) -> str:
    if code is None:
        return ""
    return str(code).strip().upper()


def resolve(code: Optional[str]) -> Optional[float]:
    """Return the multiplier for an exponent code, or None if it has none."""
    c = _clean_code(code)
    if c in NO_SCALE_CODES:
        return None
    # unknown codes have no multiplier either
    return MULTIPLIERS.get(c)


def damage_usd(amount: float, code: Optional[str]) -> Optional[float]:
    """Scale a damage magnitude to US$; None when the code has no multiplier."""
    m = resolve(code)
    if m is None:
        return None
    return amount * m


# -----------------------------
# Verified data-entry corrections
# -----------------------------

@dataclass(frozen=True)
class OutlierCorrection:
    """Rewrite one record's exponent code.

    A record matches only if all three keys agree: begin date, damage amount
    rounded to a whole number, and the original (upper-cased) code.
    """
    begin_date: date
    rounded_amount: int
    original_code: str
    corrected_code: str
    note: str = ""

    def matches(self, begin_date: Optional[date], amount: float, code: Optional[str]) -> bool:
        return (begin_date == self.begin_date
                and round(amount) == self.rounded_amount
                and _clean_code(code) == self.original_code)


KNOWN_OUTLIERS: Tuple[OutlierCorrection, ...] = (
    OutlierCorrection(
        begin_date=date(2006, 1, 1),
        rounded_amount=115,
        original_code="B",
        corrected_code="M",
        note="Napa valley flood: $115M entered as $115B",
    ),
)


def correct_exponent_code(
    begin_date: Optional[date],
    amount: float,
    code: Optional[str],
    corrections: Tuple[OutlierCorrection, ...] = KNOWN_OUTLIERS,
) -> str:
    """Return the exponent code to use for a property damage amount.

    Known bad records get their corrected code; everything else is returned
    unchanged (cleaned to upper case).
    """
    for c in corrections:
        if c.matches(begin_date, amount, code):
            return c.corrected_code
    return _clean_code(code)
