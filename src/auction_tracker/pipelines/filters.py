"""
Listing Filters

Price/discount filter and priority-neighborhood tagging.
"""
from typing import List

from src.auction_tracker.models.property import AuctionProperty
from src.auction_tracker.pipelines.config import PipelineConfig
from src.auction_tracker.transformers.normalizer import normalize_text
from src.auction_tracker.utils.logger import get_logger

logger = get_logger(__name__)


def meets_filters(prop: AuctionProperty, config: PipelineConfig) -> bool:
    """
    Check the listing has a discount of at least the minimum and a price under the cap.
    """
    if prop.discount_percent is None or prop.discount_percent < config.min_discount_percent:
        return False
    if prop.bid_price > config.max_price:
        return False
    return True


def is_priority_neighborhood(neighborhood: str, config: PipelineConfig) -> bool:
    """
    Case- and accent-insensitive substring match in both directions.

    "Batel" matches "Batel"; "Agua Verde (Curitiba)" matches "Água Verde".
    """
    target = normalize_text(neighborhood)
    if not target:
        return False

    for candidate in config.priority_neighborhoods:
        normalized = normalize_text(candidate)
        if normalized and (normalized in target or target in normalized):
            return True
    return False


def filter_properties(properties: List[AuctionProperty], config: PipelineConfig) -> List[AuctionProperty]:
    """Keep listings that pass meets_filters, preserving order."""
    kept = [p for p in properties if meets_filters(p, config)]

    logger.info(
        "filters_applied",
        total=len(properties),
        kept=len(kept),
        min_discount=config.min_discount_percent,
        max_price=config.max_price
    )

    return kept


def annotate_priority(properties: List[AuctionProperty], config: PipelineConfig) -> List[AuctionProperty]:
    """Return copies with is_priority set from the neighborhood."""
    return [
        p.model_copy(update={"is_priority": is_priority_neighborhood(p.neighborhood, config)})
        for p in properties
    ]
