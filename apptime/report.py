#!/usr/bin/env python3
"""Print monthly and daily usage summaries from the saved log."""
import argparse
from typing import List, Optional
from .config import DATA_FILE, settings
from .models import format_duration, is_date_key, is_month_key
from .services import QueryService
from .store import UsageStore

BAR_WIDTH = 40


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show recorded application usage")
    parser.add_argument("--month", default=None, help="Month to show (YYYY-MM, default latest)")
    parser.add_argument("--date", default=None, help="Day to break down (YYYY-MM-DD, default latest in month)")
    parser.add_argument("--top", type=int, default=None, help="Number of top apps to list")
    parser.add_argument("--file", default=DATA_FILE, help="Usage log path")
    return parser.parse_args(argv)


def render_month(queries: QueryService, month: str) -> List[str]:
    """Text bar chart of daily totals."""
    summary = queries.month_summary(month)
    lines = [f"== {month} =="]
    ceiling = summary["ceiling"]
    for day in summary["days"]:
        width = int(round(BAR_WIDTH * day["seconds"] / ceiling)) if ceiling else 0
        if day["seconds"] > 0:
            width = max(width, 1)
        lines.append(f"{day['date'][5:]}  {'#' * width:<{BAR_WIDTH}}  {format_duration(day['seconds'])}")
    return lines


def render_day(queries: QueryService, date: str, top: int) -> List[str]:
    lines = [f"-- {date}  total {format_duration(queries.day_total(date))} --"]
    top_apps = queries.top_apps(date, top)
    if top_apps:
        lines.append(f"Top {len(top_apps)}:")
        for app, secs in top_apps:
            lines.append(f"  {app:<32} {format_duration(secs)}")
    lines.append("All apps:")
    for app, secs in queries.day_detail(date):
        lines.append(f"  {app:<32} {format_duration(secs)}")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.month and not is_month_key(args.month):
        print(f"Invalid month: {args.month}")
        return 2
    if args.date and not is_date_key(args.date):
        print(f"Invalid date: {args.date}")
        return 2

    store = UsageStore(args.file)
    store.load()
    queries = QueryService(store)
    try:
        month = args.month or (args.date[:7] if args.date else queries.latest_month())
        if month is None:
            print("No usage recorded yet.")
            return 0

        print("\n".join(render_month(queries, month)))
        date = queries.default_date(month, args.date)
        if date is not None:
            top = args.top if args.top is not None else settings.top_apps_limit
            print()
            print("\n".join(render_day(queries, date, top)))
        return 0
    finally:
        queries.close()


if __name__ == "__main__":
    raise SystemExit(main())
