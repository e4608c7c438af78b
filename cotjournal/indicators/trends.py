from __future__ import annotations

from typing import Iterable

import numpy as np
import pandas as pd

from cotjournal.report.assembler import Report

TREND_COLUMNS = [
    "report_date",
    "code",
    "display_name",
    "category",
    "net_position",
    "net_percent",
    "delta",
    "signal",
    "is_flip",
]


def history_frame(reports: Iterable[Report]) -> pd.DataFrame:
    """
    Long table of stored reports (1 row = code x report_date).

    Sorted by code then date so groupby(diff) runs oldest -> newest.
    """
    frames = [r.to_frame() for r in reports]
    if not frames:
        return pd.DataFrame(columns=TREND_COLUMNS)

    df = pd.concat(frames, ignore_index=True)[TREND_COLUMNS].copy()
    df["report_date"] = pd.to_datetime(df["report_date"]).dt.date

    dups = int(df.duplicated(["code", "report_date"]).sum())
    if dups != 0:
        raise ValueError(f"History duplication detected: {dups}")

    return df.sort_values(["code", "report_date"]).reset_index(drop=True)


def net_percent_pivot(reports: Iterable[Report]) -> pd.DataFrame:
    """Net % of OI per instrument (columns) over report dates (rows)."""
    df = history_frame(reports)
    if df.empty:
        return pd.DataFrame()
    return df.pivot(index="report_date", columns="display_name", values="net_percent").sort_index()


def compare_reports(current: Report, previous: Report) -> pd.DataFrame:
    """
    Week-vs-week (or any two stored dates) comparison per instrument.

    Instruments missing from `previous` keep NaN changes.
    """
    cur = current.to_frame()[["code", "display_name", "net_position", "net_percent", "signal"]]
    prev = previous.to_frame()[["code", "net_position", "net_percent"]]

    out = cur.merge(prev, on="code", how="left", suffixes=("", "_prev"))
    out["net_percent_chg"] = (out["net_percent"] - out["net_percent_prev"]).round(1)
    out["net_position_chg"] = out["net_position"] - out["net_position_prev"]

    sign_now = np.sign(out["net_position"].astype(float))
    sign_prev = np.sign(out["net_position_prev"].astype(float))
    out["flipped_since"] = (sign_now * sign_prev) < 0

    out.insert(0, "report_date", current.date)
    out.insert(1, "compared_to", previous.date)
    return out.sort_values("net_percent_chg", ascending=False, na_position="last").reset_index(drop=True)
