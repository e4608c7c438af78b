from __future__ import annotations

from enum import Enum


class Signal(str, Enum):
    NEUTRAL = "NEUTRAL"
    STRONG_LONG = "STRONG_LONG"
    STRONG_SHORT = "STRONG_SHORT"
    DIVERGENCE = "DIVERGENCE"
    COT_FLIP = "COT_FLIP"


def is_flip(net: float, prior_net: float) -> bool:
    """Net position crossed zero week over week (0 on either side is not a flip)."""
    return (net > 0 and prior_net < 0) or (net < 0 and prior_net > 0)


def classify_signal(net: float, delta: float, flip: bool) -> Signal:
    """
    Signal from the net position and the week-over-week change in net % of OI.

    Rules are applied in order, a later match overrides an earlier one:
      - NEUTRAL by default
      - STRONG_LONG: net long and growing
      - STRONG_SHORT: net short and growing
      - DIVERGENCE: net side and delta disagree
      - COT_FLIP: net crossed zero (always wins)
    """
    signal = Signal.NEUTRAL
    if net > 0 and delta > 0:
        signal = Signal.STRONG_LONG
    if net < 0 and delta < 0:
        signal = Signal.STRONG_SHORT
    if (net > 0 and delta < 0) or (net < 0 and delta > 0):
        signal = Signal.DIVERGENCE
    if flip:
        signal = Signal.COT_FLIP
    return signal
