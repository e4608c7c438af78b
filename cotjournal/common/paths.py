from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

@dataclass(frozen=True)
class ProjectPaths:
    root: Path

    @property
    def configs(self) -> Path: return self.root / "configs"
    @property
    def markets_config(self) -> Path: return self.configs / "markets.yaml"
    @property
    def data(self) -> Path: return self.root / "data"
    @property
    def raw(self) -> Path: return self.data / "raw"
    @property
    def assets(self) -> Path: return self.root / "Assets"
    @property
    def history(self) -> Path: return self.data / "history"
    @property
    def manifest(self) -> Path: return self.raw / "manifest.csv"
