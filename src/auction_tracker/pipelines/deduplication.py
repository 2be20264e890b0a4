"""
Listing Deduplication Pipeline

Merges listing batches from multiple sources into one set with a single
listing per address, keeping the most complete listing of each group.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from src.auction_tracker.models.property import AuctionProperty
from src.auction_tracker.pipelines.config import PipelineConfig
from src.auction_tracker.scoring.completeness import CompletenessScorer
from src.auction_tracker.transformers.similarity import AddressMatcher
from src.auction_tracker.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class DedupStats:
    """Counters from one dedupe() call."""
    input_count: int = 0
    output_count: int = 0
    duplicates: int = 0
    replacements: int = 0


class PropertyDeduplicator:
    """
    Deduplicates auction listings by fuzzy address matching.

    Listings are processed in input order (source order, then within-source
    order). Each group of duplicates is keyed by the normalized address of
    the first listing seen for it; later listings are compared against that
    representative key only, even after the group's listing was replaced.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        matcher: Optional[AddressMatcher] = None,
        scorer: Optional[CompletenessScorer] = None
    ):
        """
        Initialize deduplicator.

        Args:
            config: Pipeline configuration (threshold, default modality)
            matcher: Override the address matcher (for testing)
            scorer: Override the completeness scorer (for testing)
        """
        self.config = config or PipelineConfig()
        self.matcher = matcher or AddressMatcher(self.config.dedup_similarity_threshold)
        self.scorer = scorer or CompletenessScorer(self.config.default_sale_modality)
        self.last_stats = DedupStats()
        logger.debug("property_deduplicator_initialized", threshold=self.matcher.threshold)

    def dedupe(self, batches: Sequence[Sequence[AuctionProperty]]) -> List[AuctionProperty]:
        """
        Merge listing batches into a list of unique listings.

        Args:
            batches: One list of listings per source

        Returns:
            Unique listings; a replaced listing keeps its group's position
        """
        properties = [prop for batch in batches for prop in batch]
        stats = DedupStats(input_count=len(properties))

        logger.info(
            "dedup_started",
            batches=len(batches),
            total_properties=len(properties)
        )

        # Representative key -> slot in `unique`; dicts keep insertion order
        groups: Dict[str, int] = {}
        unique: List[AuctionProperty] = []

        for prop in properties:
            key = self.matcher.key(prop.address)
            match = self._find_group(key, groups)

            if match is None:
                groups[key] = len(unique)
                unique.append(prop)
                continue

            group_key, score = match
            stats.duplicates += 1
            slot = groups[group_key]
            existing = unique[slot]

            logger.debug(
                "duplicate_found",
                address=prop.address,
                matched_address=existing.address,
                similarity=round(score, 3)
            )

            if self.scorer.prefers(prop, existing):
                stats.replacements += 1
                unique[slot] = prop
                logger.info(
                    "record_replaced",
                    address=prop.address,
                    replaced_id=existing.id,
                    replaced_source=existing.source,
                    winner_id=prop.id,
                    winner_source=prop.source
                )

        stats.output_count = len(unique)
        self.last_stats = stats

        logger.info(
            "dedup_complete",
            unique_properties=stats.output_count,
            duplicates=stats.duplicates,
            replacements=stats.replacements
        )

        return unique

    def _find_group(self, key: str, groups: Dict[str, int]) -> Optional[Tuple[str, float]]:
        """First representative key (in insertion order) that key duplicates."""
        for group_key in groups:
            score = self.matcher.score(key, group_key)
            if self.matcher.is_duplicate_score(score):
                return group_key, score
        return None


def dedupe(
    batches: Sequence[Sequence[AuctionProperty]],
    config: Optional[PipelineConfig] = None
) -> List[AuctionProperty]:
    """Deduplicate listing batches with a fresh PropertyDeduplicator."""
    return PropertyDeduplicator(config).dedupe(batches)
