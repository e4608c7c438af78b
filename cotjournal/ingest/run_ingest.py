"""Fetch the latest weekly COT files from the CFTC, parse and store them."""

from __future__ import annotations

import argparse
from pathlib import Path

import requests

from cotjournal.common.config import audit_codes, history_path, load_markets_config
from cotjournal.common.logging import setup_logging
from cotjournal.common.paths import ProjectPaths
from cotjournal.history.publish import qa_and_store
from cotjournal.history.store import JsonHistoryStore
from cotjournal.ingest.cftc_downloader import FetchResult, fetch_text
from cotjournal.ingest.manifest import ManifestRow, append_manifest, archive_raw, sha256_file
from cotjournal.normalize.cot_parser import parse_cot_sources
from cotjournal.normalize.instruments import build_instrument_specs
from cotjournal.report.assembler import EmptyReportError

FILE_LABELS = {
    "financial": "FinFutWk",
    "disaggregated": "f_disagg",
}


def _archive(paths: ProjectPaths, dataset: str, report_date: str, fetched: dict[str, FetchResult], logger) -> None:
    out_dir = paths.raw / dataset / report_date
    for kind, res in fetched.items():
        out = out_dir / f"{FILE_LABELS[kind]}_{report_date}.txt"
        try:
            archive_raw(res.text, out)
            append_manifest(
                paths.manifest,
                ManifestRow(
                    dataset=dataset,
                    report_date=report_date,
                    url=res.url,
                    downloaded_at_utc=res.fetched_at_utc,
                    raw_path=str(out.relative_to(paths.root)),
                    sha256=sha256_file(out),
                    size_bytes=out.stat().st_size,
                    status="OK",
                ),
            )
            logger.info(f"[ingest] archived {kind} -> {out.name}")
        except OSError as e:
            # report is already stored, archive failure is not fatal
            logger.warning(f"[ingest] failed to archive {kind} file: {e}")


def main():
    p = argparse.ArgumentParser(description="Fetch latest COT files and store the parsed report")
    p.add_argument("--root", default=".", help="project root")
    p.add_argument("--timeout", type=int, default=60, help="HTTP timeout in seconds")
    p.add_argument("--no-archive", action="store_true", help="do not keep raw copies")
    p.add_argument("--log-level", default="INFO")
    args = p.parse_args()

    logger = setup_logging(args.log_level)
    paths = ProjectPaths(Path(args.root).resolve())

    cfg = load_markets_config(paths.markets_config)
    specs = build_instrument_specs(cfg["markets"])
    src = cfg["source"]
    dataset = src.get("dataset", "cftc_weekly")
    urls = {
        "financial": src["financial_url"],
        "disaggregated": src["disaggregated_url"],
    }

    fetched: dict[str, FetchResult] = {}
    for kind, url in urls.items():
        logger.info(f"[ingest] fetching {kind} from {url}")
        try:
            fetched[kind] = fetch_text(url, timeout_s=args.timeout)
        except requests.RequestException as e:
            append_manifest(
                paths.manifest,
                ManifestRow(
                    dataset=dataset,
                    report_date="",
                    url=url,
                    downloaded_at_utc="",
                    raw_path="",
                    sha256="",
                    size_bytes=0,
                    status="ERROR",
                    error=str(e)[:500],
                ),
            )
            logger.error(f"[ingest] ERROR fetching {kind}: {e}")
            raise SystemExit(f"Fetch failed for {url}")
        logger.info(f"[ingest] {kind}: {fetched[kind].size_bytes} bytes")

    sources = [(f"Downloaded {FILE_LABELS[k]}", res.text) for k, res in fetched.items()]
    try:
        parsed = parse_cot_sources(sources, specs, audit_codes=audit_codes(cfg))
    except EmptyReportError as e:
        logger.error(f"[ingest] {e}")
        raise SystemExit("No configured instruments found in downloaded files.")

    report = parsed.report
    logger.info(f"[ingest] detected report date: {report.date}")

    store = JsonHistoryStore(history_path(cfg, paths.root))
    status = qa_and_store(report, specs, store, paths.history / "qa_report.txt")
    logger.info(f"[ingest] status={status.value} date={report.date} instruments={len(report.instruments)}")

    if not args.no_archive:
        _archive(paths, dataset, report.date, fetched, logger)

    logger.info("[ingest] DONE")


if __name__ == "__main__":
    main()
