"""
Completeness scoring for auction listings.

Rates how much useful data a listing carries. Only meaningful for comparing
two listings that claim the same address.
"""
from __future__ import annotations

from typing import Dict, Optional

from src.auction_tracker.models.property import AuctionProperty


class CompletenessScorer:
    """
    Integer completeness score.

    - Appraisal and discount are worth the most (they drive the filters).
    - Area and a known occupancy come next.
    - Closing date, detailed address and specific sale modality add one each.
    """

    WEIGHTS: Dict[str, int] = {
        "appraised_value": 3,
        "discount_percent": 3,
        "area": 2,
        "occupancy": 2,
        "closing_date": 1,
        "detailed_address": 1,
        "sale_modality": 1,
    }

    # Addresses longer than this are considered detailed
    DETAILED_ADDRESS_LENGTH = 20

    def __init__(self, default_sale_modality: Optional[str] = None):
        """
        Args:
            default_sale_modality: Generic modality label that earns no points
        """
        self.default_sale_modality = default_sale_modality or "Leilão"

    def score(self, prop: AuctionProperty) -> int:
        return sum(self.WEIGHTS[field] for field, present in self.breakdown(prop).items() if present)

    def breakdown(self, prop: AuctionProperty) -> Dict[str, bool]:
        """Which weighted signals the listing provides."""
        return {
            "appraised_value": prop.has_appraisal(),
            "discount_percent": prop.has_discount(),
            "area": bool(prop.area),
            "occupancy": prop.has_known_occupancy(),
            "closing_date": bool(prop.closing_date),
            "detailed_address": len(prop.address) > self.DETAILED_ADDRESS_LENGTH,
            "sale_modality": bool(prop.sale_modality) and prop.sale_modality != self.default_sale_modality,
        }

    def prefers(self, candidate: AuctionProperty, existing: AuctionProperty) -> bool:
        """
        Whether candidate should replace existing for the same address.

        A strictly higher score wins. On a tie, the candidate wins only if it
        supplies a discount or an appraisal that the existing listing lacks.
        """
        candidate_score = self.score(candidate)
        existing_score = self.score(existing)

        if candidate_score > existing_score:
            return True
        if candidate_score == existing_score:
            if candidate.has_discount() and not existing.has_discount():
                return True
            if candidate.has_appraisal() and not existing.has_appraisal():
                return True
        return False
