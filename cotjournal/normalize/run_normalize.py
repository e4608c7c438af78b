"""Parse COT files already on disk (manual load) and store the report."""

from __future__ import annotations

import argparse
from pathlib import Path

from cotjournal.common.config import audit_codes, history_path, load_markets_config
from cotjournal.common.logging import setup_logging
from cotjournal.common.paths import ProjectPaths
from cotjournal.history.publish import qa_and_store
from cotjournal.history.store import JsonHistoryStore
from cotjournal.normalize.cot_parser import parse_cot_files
from cotjournal.normalize.instruments import build_instrument_specs
from cotjournal.report.assembler import EmptyReportError

DEFAULT_LOCAL_FILES = ["FinFutWk.txt", "f_disagg.txt"]


def _resolve_files(paths: ProjectPaths, cfg: dict, explicit: list[str], logger) -> list[Path]:
    if explicit:
        candidates = [Path(f) for f in explicit]
    else:
        names = cfg["source"].get("local_files") or DEFAULT_LOCAL_FILES
        candidates = [paths.assets / n for n in names]

    found = []
    for p in candidates:
        if p.exists():
            found.append(p)
        else:
            logger.error(f"[normalize] could not find {p}")
    return found


def main():
    p = argparse.ArgumentParser(description="Parse local COT export files into history")
    p.add_argument("files", nargs="*", help="COT text files (default: source.local_files under Assets/)")
    p.add_argument("--root", default=".", help="project root")
    p.add_argument("--date", default=None, help="fallback report date if the files carry none")
    p.add_argument("--log-level", default="INFO")
    args = p.parse_args()

    logger = setup_logging(args.log_level)
    paths = ProjectPaths(Path(args.root).resolve())

    cfg = load_markets_config(paths.markets_config)
    specs = build_instrument_specs(cfg["markets"])
    logger.info(f"[normalize] loaded {len(specs)} instruments from config")

    files = _resolve_files(paths, cfg, args.files, logger)
    if not files:
        raise SystemExit("No COT files found to parse.")

    try:
        parsed = parse_cot_files(files, specs, audit_codes=audit_codes(cfg), default_date=args.date)
    except EmptyReportError as e:
        logger.error(f"[normalize] {e}")
        raise SystemExit("No configured instruments found in the given files.")

    store = JsonHistoryStore(history_path(cfg, paths.root))
    status = qa_and_store(parsed.report, specs, store, paths.history / "qa_report.txt")

    logger.info(
        f"[normalize] date={parsed.report.date} instruments={len(parsed.report.instruments)} "
        f"records={parsed.records_accepted} duplicates={parsed.duplicates_dropped} status={status.value}"
    )
    logger.info("[normalize] DONE")


if __name__ == "__main__":
    main()
