"""
Daily run: scrape every source, run the listing pipeline and store the
day's snapshot.
"""
from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from config.settings import settings
from src.auction_tracker.models.property import AuctionProperty
from src.auction_tracker.pipelines.config import PipelineConfig
from src.auction_tracker.pipelines.runner import PipelineResult, run_pipeline, summarize_by_source
from src.auction_tracker.scrapers import CaixaScraper, LeilaoImovelScraper, ZukScraper
from src.auction_tracker.scrapers.base import BaseScraper
from src.auction_tracker.storage.snapshots import SnapshotStore
from src.auction_tracker.utils.logger import get_logger

logger = get_logger(__name__)

SOURCES = ("zuk", "caixa", "leilaoimovel")

TOP_DEALS = 5


def build_scrapers(source: str = "all", data_dir: Optional[Union[str, Path]] = None) -> List[BaseScraper]:
    """
    Instantiate scrapers for the requested source ("all" for every source).
    """
    if source != "all" and source not in SOURCES:
        raise ValueError(f"unknown source {source!r}, expected one of {', '.join(SOURCES)} or 'all'")

    data_dir = Path(data_dir or settings.data_dir)
    factories = {
        "zuk": lambda: ZukScraper(),
        "caixa": lambda: CaixaScraper(cache_path=data_dir / settings.caixa_cache_filename),
        "leilaoimovel": lambda: LeilaoImovelScraper(),
    }
    selected = SOURCES if source == "all" else (source,)
    return [factories[name]() for name in selected]


def collect_batches(scrapers: Sequence[BaseScraper]) -> List[List[AuctionProperty]]:
    """
    Run each scraper; a scraper that fails contributes an empty batch.
    """
    batches = []
    for scraper in scrapers:
        try:
            batch = scraper.fetch_properties()
        except Exception as e:
            logger.error(
                "source_fetch_failed",
                source=scraper.source_name,
                error=str(e),
                error_type=type(e).__name__
            )
            batch = []
        logger.info("source_collected", source=scraper.source_name, properties=len(batch))
        batches.append(batch)
    return batches


def run_daily(
    scrapers: Sequence[BaseScraper],
    day: Optional[date] = None,
    store: Optional[SnapshotStore] = None,
    config: Optional[PipelineConfig] = None,
    dry_run: bool = False
) -> PipelineResult:
    """
    Scrape, run the pipeline against the previous snapshot and save today's.

    Raises:
        NoDataError: If every source returned zero listings
    """
    day = day or date.today()
    store = store or SnapshotStore()

    batches = collect_batches(scrapers)
    previous = store.load_previous(day)
    result = run_pipeline(batches, previous=previous, config=config)

    if dry_run:
        logger.info("dry_run_snapshot_skipped", day=day.isoformat(), properties=len(result.properties))
    else:
        store.save(result.properties, day)

    return result


def format_currency(value: float) -> str:
    """R$ with Brazilian thousands separators, no cents."""
    return "R$" + f"{value:,.0f}".replace(",", ".")


def format_summary(result: PipelineResult, day: date) -> str:
    """Human-readable run summary with the top deals."""
    properties = result.properties
    by_source: Dict[str, int] = summarize_by_source(properties)

    lines = [
        "",
        "=" * 60,
        f"AUCTION TRACKER - {day.isoformat()}",
        "=" * 60,
        f"Scraped:            {result.stats.scraped}",
        f"Unique listings:    {len(properties)}",
        f"Priority:           {result.stats.priority}",
        f"New since previous: {result.stats.new}",
    ]
    for source, count in by_source.items():
        lines.append(f"  {source}: {count}")

    if properties:
        lines.append("")
        lines.append(f"Top {min(TOP_DEALS, len(properties))} deals:")
        for prop in properties[:TOP_DEALS]:
            marker = "*" if prop.is_priority else " "
            discount = f"{prop.discount_percent:g}%" if prop.discount_percent is not None else "n/a"
            lines.append(
                f"  {marker} {prop.property_type} - {prop.neighborhood} | "
                f"{format_currency(prop.bid_price)} ({discount} off) | {prop.source}"
            )

    lines.append("=" * 60)
    return "\n".join(lines)
