from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Sequence

from cotjournal.common.dates import today_utc_iso
from cotjournal.indicators.cot_indicators import InstrumentSnapshot, compute_snapshot
from cotjournal.normalize.instruments import InstrumentSpec
from cotjournal.normalize.locator import locate_records
from cotjournal.report.assembler import Report, assemble_report

logger = logging.getLogger("cot_journal")


@dataclass(frozen=True)
class ParsedCot:
    report: Report
    sources: tuple[str, ...]
    records_accepted: int
    duplicates_dropped: int


def parse_cot_sources(
    sources: Sequence[tuple[str, str]],
    specs: Mapping[str, InstrumentSpec],
    *,
    audit_codes: Iterable[str] = (),
    default_date: str | None = None,
) -> ParsedCot:
    """
    Parse one or more weekly COT exports into a single dated report.

    `sources` is a sequence of (label, text) pairs, e.g. the financial
    and the disaggregated file of the same week. Sources are scanned in
    order; the report date comes from the first accepted record and is
    assumed identical for every row.

    Raises EmptyReportError if no configured instrument was found.
    """
    audit_codes = tuple(audit_codes)
    report_date = None
    snapshots: list[InstrumentSnapshot] = []
    seen: set[str] = set()
    accepted = 0
    dropped = 0

    for label, text in sources:
        n_before = accepted
        for rec in locate_records(text.splitlines(), specs, source=label, audit_codes=audit_codes):
            accepted += 1
            if report_date is None:
                report_date = rec.report_date
                if not report_date:
                    report_date = default_date or today_utc_iso()
                    logger.warning(f"[parse] {label}: blank report date on first record, using {report_date}")

            if rec.spec.code in seen:
                dropped += 1
                logger.warning(f"[parse] {label}: duplicate row for {rec.spec.display_name} ({rec.spec.code}) ignored")
                continue
            seen.add(rec.spec.code)
            snapshots.append(compute_snapshot(rec.spec, rec.fields, rec.strategy))

        logger.info(f"[parse] {label}: accepted {accepted - n_before} records")

    report = assemble_report(report_date or "", snapshots)
    logger.info(f"[parse] report date={report.date} instruments={len(report.instruments)}")

    return ParsedCot(
        report=report,
        sources=tuple(label for label, _ in sources),
        records_accepted=accepted,
        duplicates_dropped=dropped,
    )


def parse_cot_files(
    paths: Sequence[Path],
    specs: Mapping[str, InstrumentSpec],
    *,
    audit_codes: Iterable[str] = (),
    default_date: str | None = None,
) -> ParsedCot:
    sources = []
    for p in paths:
        if not p.exists():
            raise FileNotFoundError(f"COT file not found: {p}")
        text = p.read_text(encoding="utf-8", errors="replace")
        logger.info(f"[parse] loaded {p.name} ({len(text)} bytes)")
        sources.append((p.name, text))
    return parse_cot_sources(sources, specs, audit_codes=audit_codes, default_date=default_date)
