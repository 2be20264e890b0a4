"""
Ranking and novelty tagging for deduplicated listings.
"""
from typing import Iterable, List, Tuple

from src.auction_tracker.models.property import AuctionProperty


def _rank_key(prop: AuctionProperty) -> Tuple[bool, float, float]:
    return (not prop.is_priority, -(prop.discount_percent or 0), prop.bid_price)


def rank_properties(properties: Iterable[AuctionProperty]) -> List[AuctionProperty]:
    """
    Order listings: priority neighborhoods first, then discount (highest
    first, missing counts as 0), then bid price (lowest first).

    The sort is stable: listings with equal keys keep their input order.
    """
    return sorted(properties, key=_rank_key)


def mark_new_properties(
    current: List[AuctionProperty],
    previous: List[AuctionProperty]
) -> List[AuctionProperty]:
    """
    Flag listings whose id is absent from the previous snapshot.

    Inputs are not modified. With an empty previous snapshot every listing is new.
    """
    previous_ids = {prop.id for prop in previous}
    return [prop.model_copy(update={"is_new": prop.id not in previous_ids}) for prop in current]
