from __future__ import annotations

import pandas as pd

from cotjournal.report.assembler import Report

DISPLAY_COLUMNS = {
    "display_name": "Contract",
    "category": "Category",
    "net_position": "Net",
    "net_percent": "Net %OI",
    "prior_net_percent": "Prev %OI",
    "delta": "Delta",
    "signal": "Signal",
    "net_value": "Net Value",
}


def _format_int(x) -> str:
    if pd.isna(x):
        return "—"
    return f"{int(x):,}"


def _format_pct(x, digits: int = 1) -> str:
    if pd.isna(x):
        return "—"
    return f"{float(x):+.{digits}f}%"


def report_table(report: Report) -> pd.DataFrame:
    df = report.to_frame()[list(DISPLAY_COLUMNS)].copy()
    df["net_position"] = df["net_position"].map(_format_int)
    df["net_value"] = df["net_value"].map(_format_int)
    for col in ("net_percent", "prior_net_percent", "delta"):
        df[col] = df[col].map(_format_pct)
    return df.rename(columns=DISPLAY_COLUMNS)


def render_report(report: Report) -> str:
    flips = [s.display_name for s in report.instruments if s.is_flip]
    lines = [
        f"COT report {report.date} ({len(report.instruments)} instruments)",
        report_table(report).to_string(index=False),
    ]
    if flips:
        lines.append(f"Flips: {', '.join(flips)}")
    return "\n".join(lines)
