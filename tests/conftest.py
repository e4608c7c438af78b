from __future__ import annotations

from pathlib import Path

import pytest

from cotjournal.normalize.columns import DISAGGREGATED_COMMODITY, FINANCIAL_FUTURES
from cotjournal.normalize.instruments import build_instrument_specs

REPO_ROOT = Path(__file__).resolve().parent.parent

TEST_MARKETS = [
    {"contract_code": "098662", "name": "USD Index", "contract_size": 1000, "category": "Forex"},
    {"contract_code": "099741", "name": "EUR", "contract_size": 125000, "category": "Forex"},
    {"contract_code": "13874A", "name": "S&P 500", "contract_size": 50, "category": "Indices"},
    {"contract_code": "088691", "name": "Gold", "contract_size": 100, "category": "Commodities"},
    {"contract_code": "001602", "name": "Wheat", "contract_size": 5000, "category": "Commodity"},
]

N_FIELDS = 40


def _fmt(v: float) -> str:
    return str(int(v)) if float(v).is_integer() else str(v)


def build_line(
    code: str,
    *,
    date: str = "2026-02-03",
    oi: float = 0,
    long: float = 0,
    short: float = 0,
    chg_oi: float = 0,
    chg_long: float = 0,
    chg_short: float = 0,
    commodity: bool = False,
    name: str = "SOME MARKET - CHICAGO MERCANTILE EXCHANGE",
) -> str:
    """One CFTC-style export row with the given values at the layout's positions."""
    cols = DISAGGREGATED_COMMODITY if commodity else FINANCIAL_FUTURES
    fields = ["0"] * N_FIELDS
    fields[0] = f'"{name}"'
    fields[1] = date.replace("-", "")[2:]
    fields[2] = date
    fields[3] = f'"{code}"'
    fields[4] = '"CME "'
    fields[cols.open_interest_index] = _fmt(oi)
    fields[cols.long_index] = _fmt(long)
    fields[cols.short_index] = _fmt(short)
    fields[cols.change_open_interest_index] = _fmt(chg_oi)
    fields[cols.change_long_index] = _fmt(chg_long)
    fields[cols.change_short_index] = _fmt(chg_short)
    return ",".join(fields)


@pytest.fixture
def specs():
    return build_instrument_specs(TEST_MARKETS)


@pytest.fixture
def make_line():
    return build_line


@pytest.fixture
def usd_line():
    # OI=50000, L=20000, S=12000, chg 1000/500/-300
    return build_line("098662", oi=50000, long=20000, short=12000, chg_oi=1000, chg_long=500, chg_short=-300)
