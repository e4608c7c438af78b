from __future__ import annotations

import math
from dataclasses import asdict, dataclass

from cotjournal.indicators.signal_rules import Signal, classify_signal, is_flip
from cotjournal.normalize.columns import ColumnStrategy
from cotjournal.normalize.instruments import InstrumentSpec
from cotjournal.normalize.numbers import field_number


def round_half_up(x: float, digits: int = 0) -> float:
    # matches the journal's display rounding (.5 rounds towards +inf)
    factor = 10 ** digits
    return math.floor(x * factor + 0.5) / factor


def pct_of(part: float, whole: float) -> float:
    if whole == 0:
        return 0.0
    return part / whole * 100


@dataclass(frozen=True)
class InstrumentSnapshot:
    code: str
    display_name: str
    category: str
    net_position: int
    net_value: float
    net_percent: float
    prior_net_percent: float
    delta: float
    signal: Signal
    is_flip: bool
    # raw inputs, kept for audit
    open_interest: float
    long: float
    short: float
    prior_open_interest: float
    prior_long: float
    prior_short: float
    prior_net: float

    def to_dict(self) -> dict:
        d = asdict(self)
        d["signal"] = self.signal.value
        return d

    @classmethod
    def from_dict(cls, d: dict) -> "InstrumentSnapshot":
        names = cls.__dataclass_fields__.keys()
        kwargs = {k: d[k] for k in names if k in d}
        kwargs["signal"] = Signal(d["signal"])
        return cls(**kwargs)


def compute_snapshot(spec: InstrumentSpec, fields: list[str], strategy: ColumnStrategy) -> InstrumentSnapshot:
    """
    Derive positioning metrics for one instrument row.

    The prior week is reconstructed as current minus the published
    week-over-week change, so a single weekly file is enough:

        prior_oi    = oi    - chg_oi
        prior_long  = long  - chg_long
        prior_short = short - chg_short

    Percentages and delta are computed unrounded; only the exposed
    figures are rounded (1 decimal, net position to whole contracts).
    """
    oi = field_number(fields, strategy.open_interest_index)
    longs = field_number(fields, strategy.long_index)
    shorts = field_number(fields, strategy.short_index)
    chg_oi = field_number(fields, strategy.change_open_interest_index)
    chg_long = field_number(fields, strategy.change_long_index)
    chg_short = field_number(fields, strategy.change_short_index)

    net = longs - shorts
    net_value = net * spec.contract_size
    net_pct = pct_of(net, oi)

    prior_oi = oi - chg_oi
    prior_long = longs - chg_long
    prior_short = shorts - chg_short
    prior_net = prior_long - prior_short
    prior_pct = pct_of(prior_net, prior_oi)

    delta = net_pct - prior_pct
    flip = is_flip(net, prior_net)

    return InstrumentSnapshot(
        code=spec.code,
        display_name=spec.display_name,
        category=spec.category.value,
        net_position=int(round_half_up(net)),
        net_value=net_value,
        net_percent=round_half_up(net_pct, 1),
        prior_net_percent=round_half_up(prior_pct, 1),
        delta=round_half_up(delta, 1),
        signal=classify_signal(net, delta, flip),
        is_flip=flip,
        open_interest=oi,
        long=longs,
        short=shorts,
        prior_open_interest=prior_oi,
        prior_long=prior_long,
        prior_short=prior_short,
        prior_net=prior_net,
    )
