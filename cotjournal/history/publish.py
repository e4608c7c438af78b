from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from cotjournal.history.store import HistoryStore, SaveStatus, store_report
from cotjournal.normalize.instruments import InstrumentSpec
from cotjournal.normalize.qa_checks import run_qa
from cotjournal.report.assembler import Report

logger = logging.getLogger("cot_journal")


def qa_and_store(
    report: Report,
    specs: Mapping[str, InstrumentSpec],
    store: HistoryStore,
    qa_path: Path,
) -> SaveStatus:
    """Run QA, write the QA report next to history, then store. QA failure exits."""
    errors = run_qa(report, specs)

    qa_path.parent.mkdir(parents=True, exist_ok=True)
    qa_path.write_text("\n".join(errors) if errors else "OK", encoding="utf-8")

    if errors:
        logger.error("[history] QA FAILED:\n" + "\n".join(errors))
        raise SystemExit(f"COT report QA failed. See {qa_path}")

    return store_report(store, report)
