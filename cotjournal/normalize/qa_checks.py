from __future__ import annotations

import math
from typing import Mapping

from cotjournal.common.dates import is_iso_date
from cotjournal.normalize.instruments import InstrumentSpec
from cotjournal.report.assembler import Report

NUMERIC_FIELDS = [
    "net_value",
    "net_percent",
    "prior_net_percent",
    "delta",
    "open_interest",
    "long",
    "short",
]


def run_qa(report: Report, specs: Mapping[str, InstrumentSpec]) -> list[str]:
    """
    Gate checks for an assembled report before it goes into history.

    Returns list of error messages (empty list = PASS).
    """
    errs = []

    # 1. Date must be a real ISO date, it is the history key
    if not is_iso_date(report.date):
        errs.append(f"report date is not YYYY-MM-DD: {report.date!r}")

    # 2. Uniqueness: one snapshot per contract code
    codes = report.codes
    dups = sorted({c for c in codes if codes.count(c) > 1})
    if dups:
        errs.append(f"duplicate contract codes: {dups}")

    # 3. Whitelist integrity
    unexpected = sorted(set(codes) - set(specs.keys()))
    if unexpected:
        errs.append(f"unexpected contract codes: {unexpected}")

    # 4. Numbers must be finite
    for s in report.instruments:
        bad = [f for f in NUMERIC_FIELDS if not math.isfinite(getattr(s, f))]
        if bad:
            errs.append(f"non-finite values code={s.code} fields={bad}")

    # 5. Open interest strictly positive (zero rows are filtered by the locator)
    non_positive = [s.code for s in report.instruments if s.open_interest <= 0]
    if non_positive:
        errs.append(f"non-positive open interest: {non_positive}")

    # 6. Sort order: net_percent descending
    pcts = [s.net_percent for s in report.instruments]
    if any(a < b for a, b in zip(pcts, pcts[1:])):
        errs.append("instruments not sorted by net_percent descending")

    return errs
