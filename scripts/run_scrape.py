"""
Run the Daily Auction Scrape

Scrapes the configured sources, deduplicates and ranks the listings and
writes data/YYYY-MM-DD.json.

Usage:
    python scripts/run_scrape.py                    # all sources
    python scripts/run_scrape.py --source zuk       # a single source
    python scripts/run_scrape.py --dry-run          # no snapshot written
"""
import argparse
import sys
from datetime import date
from pathlib import Path

# Add parent directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.auction_tracker.pipelines.runner import NoDataError
from src.auction_tracker.services.daily_run import SOURCES, build_scrapers, format_summary, run_daily
from src.auction_tracker.storage.snapshots import SnapshotError, SnapshotStore
from src.auction_tracker.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Scrape auction listings and store the daily snapshot.")
    parser.add_argument(
        "--source",
        choices=("all",) + SOURCES,
        default="all",
        help="Source to scrape (default: all)"
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Snapshot date as YYYY-MM-DD (default: today)"
    )
    parser.add_argument("--data-dir", default=None, help="Snapshot directory (default: settings.data_dir)")
    parser.add_argument("--dry-run", action="store_true", help="Run the pipeline without writing a snapshot")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point for the daily scrape."""
    args = parse_args(argv)
    setup_logging()

    day = args.date or date.today()
    logger.info("daily_scrape_started", day=day.isoformat(), source=args.source, dry_run=args.dry_run)

    scrapers = build_scrapers(args.source, data_dir=args.data_dir)
    store = SnapshotStore(args.data_dir)

    try:
        result = run_daily(scrapers, day=day, store=store, dry_run=args.dry_run)
    except NoDataError:
        print("\n! No listings scraped from any source, snapshot not written\n")
        return 1
    except SnapshotError as e:
        logger.error("previous_snapshot_unreadable", path=str(e.path), error=str(e))
        print(f"\n! Previous snapshot is corrupt, snapshot not written: {e.path}\n")
        return 2

    print(format_summary(result, day))
    return 0


if __name__ == "__main__":
    sys.exit(main())
