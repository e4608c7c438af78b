"""Print stored COT reports, trends and debug lookups."""

from __future__ import annotations

import argparse
from pathlib import Path

from cotjournal.common.config import history_path, load_markets_config
from cotjournal.common.logging import setup_logging
from cotjournal.common.paths import ProjectPaths
from cotjournal.history.store import JsonHistoryStore
from cotjournal.indicators.trends import compare_reports, history_frame, net_percent_pivot
from cotjournal.normalize.locator import search_code
from cotjournal.report.render import render_report


def main():
    p = argparse.ArgumentParser(description="Show stored COT reports")
    p.add_argument("--root", default=".", help="project root")
    p.add_argument("--date", default=None, help="report date (default: latest)")
    p.add_argument("--dates", action="store_true", help="list stored report dates")
    p.add_argument("--trend", type=int, default=0, metavar="N", help="net %% of OI over the last N reports")
    p.add_argument("--compare", action="store_true", help="compare with the previous stored report")
    p.add_argument("--export", default=None, help="write the last --trend reports to CSV")
    p.add_argument("--search", default=None, metavar="CODE", help="find the raw line for a contract code")
    p.add_argument("--file", default=None, help="COT text file for --search")
    p.add_argument("--log-level", default="INFO")
    args = p.parse_args()

    logger = setup_logging(args.log_level)
    paths = ProjectPaths(Path(args.root).resolve())

    if args.search:
        if not args.file:
            raise SystemExit("--search needs --file")
        res = search_code(Path(args.file).read_text(encoding="utf-8", errors="replace"), args.search)
        print(f"{args.search}: {'found' if res.found else 'not found'}\n{res.raw_line}")
        return

    cfg = load_markets_config(paths.markets_config)
    store = JsonHistoryStore(history_path(cfg, paths.root))

    if args.dates:
        print("\n".join(store.list_dates()))
        return

    report = store.get(args.date) if args.date else store.latest()
    if report is None:
        raise SystemExit(f"No stored report{' for ' + args.date if args.date else ''}.")

    print(render_report(report))

    if args.compare:
        older = [d for d in store.list_dates() if d < report.date]
        if not older:
            logger.warning(f"[report] nothing stored before {report.date} to compare with")
        else:
            cmp = compare_reports(report, store.get(older[0]))
            print(f"\nChange since {older[0]}")
            print(cmp[["display_name", "net_percent", "net_percent_prev", "net_percent_chg", "flipped_since"]]
                  .to_string(index=False))

    if args.trend > 0:
        reports = store.recent(args.trend)
        print(f"\nNet % of OI, last {len(reports)} reports")
        print(net_percent_pivot(reports).to_string())
        if args.export:
            out = Path(args.export)
            out.parent.mkdir(parents=True, exist_ok=True)
            history_frame(reports).to_csv(out, index=False)
            logger.info(f"[report] wrote {out}")


if __name__ == "__main__":
    main()
