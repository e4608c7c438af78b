from __future__ import annotations

import dataclasses
import math

import pandas as pd

from cotjournal.indicators.trends import compare_reports, history_frame, net_percent_pivot
from cotjournal.normalize.cot_parser import parse_cot_sources
from cotjournal.normalize.qa_checks import run_qa
from cotjournal.report.assembler import Report
from cotjournal.report.render import render_report


def _report(specs, make_line, date, usd_long, eur_long, eur_chg_long=0):
    lines = [
        make_line("098662", oi=1000, long=usd_long, short=200, date=date),
        make_line("099741", oi=1000, long=eur_long, short=200, chg_long=eur_chg_long, date=date),
    ]
    return parse_cot_sources([("FinFutWk.txt", "\n".join(lines))], specs).report


def test_qa_passes_clean_report(specs, make_line):
    assert run_qa(_report(specs, make_line, "2026-02-03", 500, 300), specs) == []


def test_qa_flags_problems(specs, make_line):
    good = _report(specs, make_line, "2026-02-03", 500, 300)
    first, second = good.instruments
    weird = dataclasses.replace(second, code="777777", delta=math.nan)
    bad = Report(date="03/02/2026", instruments=(weird, first, first))

    errs = run_qa(bad, specs)
    text = "\n".join(errs)
    assert "not YYYY-MM-DD" in text
    assert "duplicate contract codes: ['098662']" in text
    assert "unexpected contract codes: ['777777']" in text
    assert "non-finite values code=777777" in text
    assert "not sorted" in text


def test_history_frame_and_pivot(specs, make_line):
    reports = [
        _report(specs, make_line, "2026-02-03", 500, 300),
        _report(specs, make_line, "2026-01-27", 400, 350),
    ]
    df = history_frame(reports)
    assert len(df) == 4
    assert list(df["code"]) == ["098662", "098662", "099741", "099741"]
    assert df["report_date"].iloc[0] < df["report_date"].iloc[1]

    pv = net_percent_pivot(reports)
    assert list(pv.columns) == ["EUR", "USD Index"]
    assert pv.loc[pd.Timestamp("2026-02-03").date(), "USD Index"] == 30.0


def test_history_frame_empty():
    assert history_frame([]).empty
    assert net_percent_pivot([]).empty


def test_compare_reports(specs, make_line):
    prev = _report(specs, make_line, "2026-01-27", 500, 100)
    lines = [
        make_line("098662", oi=1000, long=400, short=200, date="2026-02-03"),
        make_line("099741", oi=1000, long=600, short=200, date="2026-02-03"),
        make_line("13874A", oi=1000, long=600, short=200, date="2026-02-03"),
    ]
    cur = parse_cot_sources([("FinFutWk.txt", "\n".join(lines))], specs).report

    cmp = compare_reports(cur, prev).set_index("code")
    assert cmp.loc["099741", "net_percent_chg"] == 50.0
    assert bool(cmp.loc["099741", "flipped_since"]) is True
    assert cmp.loc["098662", "net_percent_chg"] == -10.0
    assert bool(cmp.loc["098662", "flipped_since"]) is False
    assert pd.isna(cmp.loc["13874A", "net_percent_chg"])
    assert (cmp["compared_to"] == "2026-01-27").all()


def test_render_report_lists_instruments_and_flips(specs, make_line):
    report = _report(specs, make_line, "2026-02-03", 500, 100, eur_chg_long=-300)
    text = render_report(report)
    assert "COT report 2026-02-03 (2 instruments)" in text
    assert "USD Index" in text
    assert "+30.0%" in text
    assert "Flips: EUR" in text
