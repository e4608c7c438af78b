"""Find target-instrument rows in raw CFTC export lines."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping

from cotjournal.normalize.columns import ColumnStrategy
from cotjournal.normalize.instruments import InstrumentSpec
from cotjournal.normalize.numbers import field_number

logger = logging.getLogger("cot_journal")

DATE_FIELD_INDEX = 2


@dataclass(frozen=True)
class LocatedRecord:
    spec: InstrumentSpec
    fields: list[str]
    strategy: ColumnStrategy
    source: str = ""

    @property
    def report_date(self) -> str:
        if len(self.fields) <= DATE_FIELD_INDEX:
            return ""
        return self.fields[DATE_FIELD_INDEX].strip()


@dataclass(frozen=True)
class CodeSearchResult:
    found: bool
    raw_line: str


def split_fields(line: str) -> list[str]:
    return line.replace('"', "").strip().split(",")


def match_code(fields: list[str], specs: Mapping[str, InstrumentSpec]) -> InstrumentSpec | None:
    # first known code in field order wins
    for f in fields:
        spec = specs.get(f.strip())
        if spec is not None:
            return spec
    return None


def locate_records(
    lines: Iterable[str],
    specs: Mapping[str, InstrumentSpec],
    *,
    source: str = "",
    audit_codes: Iterable[str] = (),
) -> Iterator[LocatedRecord]:
    """
    Yield one LocatedRecord per line that belongs to a configured instrument.

    Lines with no known code are skipped silently; most rows in the weekly
    files are markets outside the target table. Rows whose open interest
    parses to 0 are placeholder/footer rows and are skipped as well.
    """
    audit = set(audit_codes)

    for lineno, line in enumerate(lines, start=1):
        fields = split_fields(line)
        spec = match_code(fields, specs)
        if spec is None:
            continue

        strategy = spec.strategy

        if spec.code in audit:
            raw_long = fields[strategy.long_index] if len(fields) > strategy.long_index else ""
            raw_short = fields[strategy.short_index] if len(fields) > strategy.short_index else ""
            logger.info(
                f"[parse] audit {spec.display_name} ({spec.code}) source={source or '-'} "
                f"strategy={strategy.describe()} long[{strategy.long_index}]={raw_long} "
                f"short[{strategy.short_index}]={raw_short}"
            )

        if field_number(fields, strategy.open_interest_index) == 0:
            logger.debug(f"[parse] {source or '-'} line {lineno}: zero open interest for {spec.code}, skipped")
            continue

        yield LocatedRecord(spec=spec, fields=fields, strategy=strategy, source=source)


def search_code(text: str, code: str) -> CodeSearchResult:
    """Debug helper: first raw line mentioning `code`, truncated for display."""
    for line in text.splitlines():
        if code in line:
            return CodeSearchResult(found=True, raw_line=line[:200] + "...")
    return CodeSearchResult(found=False, raw_line="NOT FOUND")
