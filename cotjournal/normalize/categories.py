from __future__ import annotations

from enum import Enum

from cotjournal.common.config import ConfigError


class Category(str, Enum):
    FOREX = "Forex"
    INDICES = "Indices"
    CRYPTO = "Crypto"
    BONDS = "Bonds"
    COMMODITY = "Commodity"


# spellings accepted in markets.yaml
_ALIASES = {
    "forex": Category.FOREX,
    "fx": Category.FOREX,
    "indices": Category.INDICES,
    "index": Category.INDICES,
    "crypto": Category.CRYPTO,
    "bonds": Category.BONDS,
    "rates": Category.BONDS,
    "commodity": Category.COMMODITY,
    "commodities": Category.COMMODITY,
}


def parse_category(value) -> Category:
    if isinstance(value, Category):
        return value
    key = str(value).strip().lower()
    if key not in _ALIASES:
        raise ConfigError(f"Unknown instrument category: {value!r}")
    return _ALIASES[key]
