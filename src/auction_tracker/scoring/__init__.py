"""
Scoring Module

Completeness scoring used to pick the best listing among duplicates.
"""
from src.auction_tracker.scoring.completeness import CompletenessScorer

__all__ = ["CompletenessScorer"]
