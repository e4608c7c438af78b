from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from cotjournal.common.config import ConfigError, load_markets_config
from cotjournal.common.contract_codes import is_valid_contract_code, normalize_contract_code
from cotjournal.normalize.categories import Category, parse_category
from cotjournal.normalize.columns import ColumnStrategy, resolve_strategy, validate_strategies


@dataclass(frozen=True)
class InstrumentSpec:
    code: str
    display_name: str
    contract_size: float
    category: Category

    @property
    def strategy(self) -> ColumnStrategy:
        return resolve_strategy(self.category)


def build_instrument_specs(markets: list[dict]) -> Mapping[str, InstrumentSpec]:
    """
    Build the read-only instrument table from the `markets` config list.

    Each entry needs contract_code, name, contract_size and category.
    Returns a mapping contract_code -> InstrumentSpec in config order.
    """
    validate_strategies()

    errors = []
    specs: dict[str, InstrumentSpec] = {}
    names: set[str] = set()
    for idx, m in enumerate(markets or []):
        missing = [k for k in ("contract_code", "name", "contract_size", "category") if m.get(k) in (None, "")]
        if missing:
            errors.append(f"Market at index {idx}: missing required fields: {', '.join(missing)}")
            continue

        code = normalize_contract_code(m["contract_code"])
        if not is_valid_contract_code(code):
            errors.append(f"Market at index {idx}: invalid contract_code {m['contract_code']!r}")
            continue
        if code in specs:
            errors.append(f"Duplicate contract_code: {code} (from market at index {idx})")
            continue

        name = str(m["name"]).strip()
        if name.upper() in names:
            errors.append(f"Duplicate name: {name} (from market at index {idx})")
            continue

        try:
            size = float(m["contract_size"])
        except (TypeError, ValueError):
            errors.append(f"Market at index {idx}: contract_size is not numeric: {m['contract_size']!r}")
            continue

        names.add(name.upper())
        specs[code] = InstrumentSpec(
            code=code,
            display_name=name,
            contract_size=size,
            category=parse_category(m["category"]),
        )

    if errors:
        raise ConfigError("Invalid markets config:\n" + "\n".join(errors))
    if not specs:
        raise ConfigError("Markets config defines no instruments")

    return MappingProxyType(specs)


def load_instrument_specs(path: Path) -> Mapping[str, InstrumentSpec]:
    cfg = load_markets_config(path)
    return build_instrument_specs(cfg["markets"])
