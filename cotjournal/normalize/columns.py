"""
Fixed column layouts of the two CFTC weekly exports.

The files are headerless, so positions cannot be discovered from a header
row. The instrument's category decides which layout applies:

    Traders in Financial Futures (FinFutWk.txt) -> Leveraged Funds
    Disaggregated Futures (f_disagg.txt)         -> Managed Money
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from cotjournal.common.config import ConfigError
from cotjournal.normalize.categories import Category


@dataclass(frozen=True)
class ColumnStrategy:
    name: str
    participant: str
    open_interest_index: int
    long_index: int
    short_index: int
    change_open_interest_index: int
    change_long_index: int
    change_short_index: int

    @property
    def indices(self) -> tuple[int, ...]:
        return (
            self.open_interest_index,
            self.long_index,
            self.short_index,
            self.change_open_interest_index,
            self.change_long_index,
            self.change_short_index,
        )

    def describe(self) -> str:
        return f"{self.participant} [{self.long_index},{self.short_index}]"


FINANCIAL_FUTURES = ColumnStrategy(
    name="financial_futures",
    participant="Leveraged Funds",
    open_interest_index=7,
    long_index=14,
    short_index=15,
    change_open_interest_index=24,
    change_long_index=31,
    change_short_index=32,
)

DISAGGREGATED_COMMODITY = ColumnStrategy(
    name="disaggregated_commodity",
    participant="Managed Money",
    open_interest_index=7,
    long_index=12,
    short_index=13,
    change_open_interest_index=24,
    change_long_index=29,
    change_short_index=30,
)

STRATEGY_BY_CATEGORY = MappingProxyType({
    Category.FOREX: FINANCIAL_FUTURES,
    Category.INDICES: FINANCIAL_FUTURES,
    Category.CRYPTO: FINANCIAL_FUTURES,
    Category.BONDS: FINANCIAL_FUTURES,
    Category.COMMODITY: DISAGGREGATED_COMMODITY,
})


def resolve_strategy(category: Category) -> ColumnStrategy:
    return STRATEGY_BY_CATEGORY[category]


def validate_strategies(table=STRATEGY_BY_CATEGORY) -> None:
    """Fail fast if a category has no layout or a layout reuses a column."""
    missing = [c.value for c in Category if c not in table]
    if missing:
        raise ConfigError(f"No column strategy for categories: {missing}")

    for strategy in set(table.values()):
        idx = strategy.indices
        if len(set(idx)) != len(idx):
            raise ConfigError(f"Column strategy {strategy.name} has overlapping indices: {idx}")
        if min(idx) < 0:
            raise ConfigError(f"Column strategy {strategy.name} has negative index: {idx}")
