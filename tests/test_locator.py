from __future__ import annotations

import logging

from cotjournal.normalize.columns import DISAGGREGATED_COMMODITY, FINANCIAL_FUTURES
from cotjournal.normalize.locator import locate_records, search_code, split_fields


def test_split_fields_strips_quotes():
    assert split_fields('"EURO FX - CME",260203,"2026-02-03","099741"') == [
        "EURO FX - CME", "260203", "2026-02-03", "099741",
    ]


def test_unknown_lines_are_skipped(specs, make_line):
    lines = [
        make_line("999999", oi=1000, long=10, short=5),
        "",
        "garbage without commas",
        make_line("099741", oi=1000, long=10, short=5),
    ]
    recs = list(locate_records(lines, specs))
    assert [r.spec.code for r in recs] == ["099741"]


def test_zero_open_interest_is_rejected(specs, make_line):
    lines = [make_line("098662", oi=0, long=10, short=5)]
    assert list(locate_records(lines, specs)) == []


def test_strategy_follows_category(specs, make_line):
    lines = [
        make_line("098662", oi=1000, long=10, short=5),
        make_line("001602", oi=1000, long=10, short=5, commodity=True),
    ]
    fin, comm = locate_records(lines, specs)
    assert fin.strategy is FINANCIAL_FUTURES
    assert comm.strategy is DISAGGREGATED_COMMODITY


def test_first_known_code_in_field_order_wins(specs):
    fields = ["0"] * 40
    fields[2] = "2026-02-03"
    fields[3] = "099741"
    fields[5] = "098662"
    fields[7] = "1000"
    (rec,) = locate_records([",".join(fields)], specs)
    assert rec.spec.code == "099741"


def test_record_exposes_date_and_source(specs, make_line):
    (rec,) = locate_records([make_line("099741", oi=1000, date="2026-01-27")], specs, source="FinFutWk.txt")
    assert rec.report_date == "2026-01-27"
    assert rec.source == "FinFutWk.txt"


def test_locator_is_lazy(specs, make_line):
    def lines():
        yield make_line("099741", oi=1000)
        raise AssertionError("read past the first record")

    gen = locate_records(lines(), specs)
    assert next(gen).spec.code == "099741"


def test_audit_codes_are_logged(specs, make_line, caplog):
    caplog.set_level(logging.INFO, logger="cot_journal")
    list(locate_records([make_line("001602", oi=1000, long=77, short=33, commodity=True)],
                        specs, source="f_disagg.txt", audit_codes=["001602"]))
    text = caplog.text
    assert "Wheat" in text
    assert "Managed Money [12,13]" in text
    assert "f_disagg.txt" in text
    assert "long[12]=77 short[13]=33" in text


def test_search_code(make_line):
    text = "\n".join([make_line("099741", oi=1), make_line("098662", oi=1)])
    hit = search_code(text, "098662")
    assert hit.found
    assert "098662" in hit.raw_line
    miss = search_code(text, "001602")
    assert not miss.found
    assert miss.raw_line == "NOT FOUND"
