from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import pandas as pd

from cotjournal.indicators.cot_indicators import InstrumentSnapshot


class EmptyReportError(ValueError):
    """No recognized instruments were found in the input."""


@dataclass(frozen=True)
class Report:
    date: str
    instruments: tuple[InstrumentSnapshot, ...]

    def get(self, code: str) -> InstrumentSnapshot | None:
        for s in self.instruments:
            if s.code == code:
                return s
        return None

    @property
    def codes(self) -> list[str]:
        return [s.code for s in self.instruments]

    def to_dict(self) -> dict:
        return {"date": self.date, "data": [s.to_dict() for s in self.instruments]}

    @classmethod
    def from_dict(cls, d: dict) -> "Report":
        return cls(
            date=str(d["date"]),
            instruments=tuple(InstrumentSnapshot.from_dict(x) for x in d.get("data", [])),
        )

    def to_frame(self) -> pd.DataFrame:
        rows = [s.to_dict() for s in self.instruments]
        df = pd.DataFrame(rows, columns=list(InstrumentSnapshot.__dataclass_fields__.keys()))
        df.insert(0, "report_date", self.date)
        return df


def assemble_report(date: str, snapshots: Iterable[InstrumentSnapshot]) -> Report:
    """Sort snapshots by net % of OI, highest first; ties keep input order."""
    snapshots = list(snapshots)
    if not snapshots:
        raise EmptyReportError(f"No recognized instruments found in input (date={date or '-'})")
    ordered = sorted(snapshots, key=lambda s: s.net_percent, reverse=True)
    return Report(date=date, instruments=tuple(ordered))
