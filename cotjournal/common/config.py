"""Loading of the YAML project configuration (configs/markets.yaml)."""

from __future__ import annotations

from pathlib import Path

import yaml


class ConfigError(ValueError):
    """Static configuration is missing or inconsistent."""


REQUIRED_SECTIONS = ["source", "markets"]


def load_markets_config(path: Path) -> dict:
    if not path.exists():
        raise ConfigError(f"Markets config not found: {path}")
    cfg = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(cfg, dict):
        raise ConfigError(f"Markets config must be a mapping: {path}")

    missing = [s for s in REQUIRED_SECTIONS if s not in cfg]
    if missing:
        raise ConfigError(f"Markets config missing sections: {missing} ({path})")
    return cfg


def history_path(cfg: dict, root: Path) -> Path:
    rel = (cfg.get("history") or {}).get("path", "data/history/cot_history.json")
    return root / rel


def audit_codes(cfg: dict) -> tuple[str, ...]:
    return tuple(str(c).strip() for c in cfg.get("audit_codes") or [])
