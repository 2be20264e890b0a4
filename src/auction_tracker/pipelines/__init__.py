"""
Pipelines Package

Listing pipeline stages:
- Filters: price/discount filter and priority neighborhoods
- Deduplication: fuzzy address merging across sources
- Ranking: final ordering and novelty tagging
- Runner: the whole daily pipeline
"""
from src.auction_tracker.pipelines.config import PipelineConfig
from src.auction_tracker.pipelines.deduplication import PropertyDeduplicator, DedupStats, dedupe
from src.auction_tracker.pipelines.ranking import rank_properties, mark_new_properties
from src.auction_tracker.pipelines.runner import run_pipeline, PipelineResult, NoDataError

__all__ = [
    "PipelineConfig",
    "PropertyDeduplicator",
    "DedupStats",
    "dedupe",
    "rank_properties",
    "mark_new_properties",
    "run_pipeline",
    "PipelineResult",
    "NoDataError",
]
