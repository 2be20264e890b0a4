"""
Daily Pipeline

Runs the listing pipeline over per-source batches:
validate -> filter -> tag priority -> dedupe -> rank -> tag novelty.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from src.auction_tracker.models.property import AuctionProperty
from src.auction_tracker.pipelines.config import PipelineConfig
from src.auction_tracker.pipelines.deduplication import DedupStats, PropertyDeduplicator
from src.auction_tracker.pipelines.filters import annotate_priority, filter_properties
from src.auction_tracker.pipelines.ranking import mark_new_properties, rank_properties
from src.auction_tracker.utils.logger import get_logger

logger = get_logger(__name__)

RawRecord = Union[AuctionProperty, Mapping[str, Any]]


class NoDataError(RuntimeError):
    """Raised when every source produced zero listings."""


@dataclass
class PipelineStats:
    scraped: int = 0
    invalid: int = 0
    filtered: int = 0
    priority: int = 0
    new: int = 0
    dedup: DedupStats = field(default_factory=DedupStats)


@dataclass
class PipelineResult:
    properties: List[AuctionProperty]
    stats: PipelineStats


def validate_batch(batch: Sequence[RawRecord]) -> List[AuctionProperty]:
    """
    Coerce raw records into AuctionProperty, dropping invalid ones.

    Records without an address or a valid bid price never reach deduplication.
    """
    valid = []
    errors = 0

    for idx, record in enumerate(batch):
        if isinstance(record, AuctionProperty):
            valid.append(record)
            continue
        try:
            valid.append(AuctionProperty(**record))
        except (ValidationError, TypeError) as e:
            errors += 1
            logger.warning(
                "property_validation_failed",
                record_index=idx,
                record_id=record.get("id") if isinstance(record, Mapping) else None,
                error=str(e)
            )

    if errors:
        logger.warning(
            "validation_errors_occurred",
            total_errors=errors,
            success_count=len(valid)
        )

    return valid


def run_pipeline(
    batches: Sequence[Sequence[RawRecord]],
    previous: Optional[Sequence[AuctionProperty]] = None,
    config: Optional[PipelineConfig] = None
) -> PipelineResult:
    """
    Produce the day's ranked, deduplicated listing set.

    Args:
        batches: One list of listings per source (failed sources give [])
        previous: Previous snapshot, for novelty tagging
        config: Pipeline configuration

    Returns:
        PipelineResult with the ordered listings and run counters

    Raises:
        NoDataError: If every batch is empty
    """
    config = config or PipelineConfig.from_settings()
    stats = PipelineStats(scraped=sum(len(batch) for batch in batches))

    if stats.scraped == 0:
        logger.error("no_properties_scraped", sources=len(batches))
        raise NoDataError("every source returned zero listings")

    prepared: List[List[AuctionProperty]] = []
    for batch in batches:
        valid = validate_batch(batch)
        stats.invalid += len(batch) - len(valid)
        kept = filter_properties(valid, config)
        stats.filtered += len(valid) - len(kept)
        prepared.append(annotate_priority(kept, config))

    deduplicator = PropertyDeduplicator(config)
    unique = deduplicator.dedupe(prepared)
    stats.dedup = deduplicator.last_stats

    ranked = rank_properties(unique)
    tagged = mark_new_properties(ranked, list(previous or []))

    stats.priority = sum(1 for p in tagged if p.is_priority)
    stats.new = sum(1 for p in tagged if p.is_new)

    logger.info(
        "pipeline_complete",
        scraped=stats.scraped,
        invalid=stats.invalid,
        filtered_out=stats.filtered,
        unique=len(tagged),
        priority=stats.priority,
        new=stats.new
    )

    return PipelineResult(properties=tagged, stats=stats)


def summarize_by_source(properties: Sequence[AuctionProperty]) -> Dict[str, int]:
    """Count listings per source, in first-seen order."""
    counts: Dict[str, int] = {}
    for prop in properties:
        counts[prop.source] = counts.get(prop.source, 0) + 1
    return counts
