#!/usr/bin/env python3
"""
ReadBible - yearly Bible reading plan.

Usage:
    python main.py                      # Show today's reading
    python main.py --date 2024-03-01    # Show the reading for a date
    python main.py --mark               # Toggle today's reading as read
    python main.py --progress           # Show progress through the plan
    python main.py --export plan.json   # Write the whole plan as JSON
"""

import argparse
import json
import logging
import sys
from datetime import date, datetime
from pathlib import Path

from dotenv import load_dotenv

from readbible import progress_store
from readbible.commands import (
    build_remote_client,
    completed_ids_from,
    get_progress_message,
    get_reading_message,
    load_records,
    toggle_reading,
)
from readbible.config import Config
from readbible.generator import generate_yearly_plan, parse_start_date

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="ReadBible yearly reading plan",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py --date 2024-01-03 --progress
    python main.py --user alice --mark
    python main.py --start 2024-01-01 --export plan.json
        """,
    )
    parser.add_argument(
        "--date",
        type=str,
        help="Date to show (YYYY-MM-DD format, default today)",
    )
    parser.add_argument(
        "--start",
        type=str,
        help="Plan start date (YYYY-MM-DD, default READBIBLE_PLAN_START or Jan 1 of the target year)",
    )
    parser.add_argument(
        "--user",
        type=str,
        help="User id for progress (default READBIBLE_USER_ID)",
    )
    parser.add_argument(
        "--mark",
        action="store_true",
        help="Toggle the day's reading as read",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show progress, streak and books read",
    )
    parser.add_argument(
        "--remote",
        action="store_true",
        help="Use the Supabase progress store instead of the local state file",
    )
    parser.add_argument(
        "--export",
        type=Path,
        metavar="PATH",
        help="Write the plan as JSON to PATH",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    load_dotenv()

    args = parse_args(argv)

    try:
        config = Config.from_env()
        if args.date:
            target_date = datetime.strptime(args.date, "%Y-%m-%d").date()
        else:
            target_date = date.today()
        start = (
            parse_start_date(args.start)
            if args.start
            else config.resolve_plan_start(target_date)
        )
        user_id = args.user or config.user_id
        if args.mark and not user_id:
            config.require_user()
        client = build_remote_client(config) if args.remote else None
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    config.setup_logging()
    if config.state_dir is not None:
        progress_store.use_state_dir(config.state_dir)

    plan = generate_yearly_plan(start)

    if args.export:
        args.export.write_text(
            json.dumps(plan.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8"
        )
        logger.info(f"Exported plan starting {plan.start_date} to {args.export}")
        return 0

    if args.mark:
        if plan.reading_for(target_date) is None:
            logger.error(
                f"{target_date} is outside the plan "
                f"{plan.start_date} .. {plan.end_date}, not marking"
            )
            return 1
        state = toggle_reading(user_id, target_date, client)
        if state is None:
            logger.error(f"Failed to update reading for {target_date}")
            return 1
        logger.info(f"{target_date}: {'read' if state else 'unread'}")

    records = load_records(user_id, client)
    completed_ids = completed_ids_from(records)

    print(get_reading_message(plan, completed_ids or set(), target_date))
    if args.progress:
        print()
        print(get_progress_message(plan, completed_ids, target_date, records))

    return 0 if completed_ids is not None else 1


if __name__ == "__main__":
    sys.exit(main())
