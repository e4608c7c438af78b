"""Date-keyed history of COT reports."""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Protocol

from cotjournal.report.assembler import Report

logger = logging.getLogger("cot_journal")


class HistoryStore(Protocol):
    def put(self, report: Report) -> None: ...
    def get(self, date: str) -> Report | None: ...
    def has(self, date: str) -> bool: ...
    def latest(self) -> Report | None: ...
    def recent(self, n: int = 10) -> list[Report]: ...
    def list_dates(self) -> list[str]: ...


class SaveStatus(str, Enum):
    SAVED = "SAVED"
    UPDATED = "UPDATED"
    UP_TO_DATE = "UP_TO_DATE"


class InMemoryHistoryStore:
    """
    Reports keyed by their ISO date string.

    Dates sort lexicographically, which equals chronological order only
    because they are YYYY-MM-DD. A put() for an existing date replaces the
    stored report entirely.
    """

    def __init__(self):
        self._data: dict[str, dict] | None = {}

    def _load(self) -> dict[str, dict]:
        return self._data

    def _flush(self) -> None:
        pass

    def put(self, report: Report) -> None:
        data = self._load()
        data[report.date] = report.to_dict()
        self._flush()

    def get(self, date: str) -> Report | None:
        d = self._load().get(date)
        return Report.from_dict(d) if d else None

    def has(self, date: str) -> bool:
        return date in self._load()

    def list_dates(self) -> list[str]:
        return sorted(self._load().keys(), reverse=True)

    def latest(self) -> Report | None:
        dates = self.list_dates()
        return self.get(dates[0]) if dates else None

    def recent(self, n: int = 10) -> list[Report]:
        if n <= 0:
            return []
        return [self.get(d) for d in self.list_dates()[:n]]


class JsonHistoryStore(InMemoryHistoryStore):
    """History persisted as one JSON object {date: report} on disk."""

    def __init__(self, path: Path):
        super().__init__()
        self.path = Path(path)
        self._data = None

    def _load(self) -> dict[str, dict]:
        if self._data is None:
            self._data = self._read()
        return self._data

    def _read(self) -> dict[str, dict]:
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("{}", encoding="utf-8")
            logger.info(f"[history] created {self.path}")
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"[history] failed to load {self.path}: {e}; starting with empty history")
            return {}
        if not isinstance(data, dict):
            logger.error(f"[history] {self.path} is not a JSON object; starting with empty history")
            return {}

        entries = {}
        for date, entry in data.items():
            try:
                Report.from_dict(entry)
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"[history] skipping unreadable report {date!r} in {self.path}: {e!r}")
                continue
            entries[date] = entry
        return entries

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
        tmp.replace(self.path)


def store_report(store: HistoryStore, report: Report) -> SaveStatus:
    """Save a report, telling a new date from a changed or unchanged one."""
    if not store.has(report.date):
        store.put(report)
        logger.info(f"[history] new report {report.date} saved")
        return SaveStatus.SAVED

    existing = store.get(report.date)
    if existing is not None and existing.to_dict() == report.to_dict():
        logger.info(f"[history] report {report.date} already stored and unchanged")
        return SaveStatus.UP_TO_DATE

    store.put(report)
    logger.info(f"[history] report {report.date} differed from stored copy, overwritten")
    return SaveStatus.UPDATED
