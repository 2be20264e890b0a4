"""
Pipeline Configuration

Static knobs for filtering, priority tagging and deduplication, passed
explicitly into the pipeline entry points.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

from config.settings import Settings


@dataclass(frozen=True)
class PipelineConfig:
    """
    Attributes:
        min_discount_percent: Minimum discount for a listing to be kept
        max_price: Maximum bid price for a listing to be kept
        priority_neighborhoods: Neighborhoods sorted first, in order
        dedup_similarity_threshold: Address similarity treated as duplicate
        default_sale_modality: Generic modality label (no completeness credit)
    """
    min_discount_percent: float = 40.0
    max_price: float = 800000.0
    priority_neighborhoods: Tuple[str, ...] = field(default_factory=tuple)
    dedup_similarity_threshold: float = 0.85
    default_sale_modality: str = "Leilão"

    @classmethod
    def from_settings(cls, app_settings: Optional[Settings] = None) -> "PipelineConfig":
        """Build a config from application settings (defaults to the singleton)."""
        if app_settings is None:
            from config.settings import settings as app_settings

        return cls(
            min_discount_percent=app_settings.min_discount_percent,
            max_price=app_settings.max_price,
            priority_neighborhoods=tuple(app_settings.priority_neighborhoods),
            dedup_similarity_threshold=app_settings.dedup_similarity_threshold,
            default_sale_modality=app_settings.default_sale_modality,
        )
