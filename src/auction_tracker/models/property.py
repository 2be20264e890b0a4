"""
Auction Property Models

Pydantic models for auction listings harvested from the supported sources.
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from src.auction_tracker.transformers.normalizer import calculate_discount


class OccupancyStatus(str, Enum):
    """Whether the property is known to be occupied."""

    OCCUPIED = "occupied"
    VACANT = "vacant"
    UNKNOWN = "unknown"


# Values written by the sources (and by older snapshots)
_OCCUPANCY_ALIASES = {
    "ocupado": OccupancyStatus.OCCUPIED,
    "desocupado": OccupancyStatus.VACANT,
    "desconhecido": OccupancyStatus.UNKNOWN,
    "": OccupancyStatus.UNKNOWN,
}


class AuctionProperty(BaseModel):
    """
    Auction listing from a single source.

    Attributes:
        id: Source-scoped identifier ("<source>-<sourceId>")
        property_type: Free-text category (Apartamento, Casa, Terreno...)
        neighborhood: Neighborhood (bairro), possibly with the city appended
        address: Street address as entered by the source
        bid_price: Current bid / sale price
        appraised_value: Appraisal used as reference price
        discount_percent: Discount over the appraisal, derived or source-reported
        sale_modality: Auction type (Leilão, Venda Online, Compra Direta...)
        closing_date: Auction end date (YYYY-MM-DD)
        occupancy_status: Occupied, vacant or unknown
        area: Size descriptor ("70m² (terreno: 200m²)")
        source: Origin site
        link: URL of the original listing
        is_new: Absent from the previous snapshot
        is_priority: Neighborhood is in the priority list
    """

    id: str = Field(..., description="Source-scoped identifier", min_length=1)
    property_type: str = Field("Imóvel", description="Property type")
    neighborhood: str = Field("", description="Neighborhood")
    address: str = Field(..., description="Street address", min_length=1)
    bid_price: float = Field(..., description="Current bid price", ge=0)
    appraised_value: Optional[float] = Field(None, description="Appraised value", ge=0)
    discount_percent: Optional[float] = Field(None, description="Discount over appraisal (%)")
    sale_modality: str = Field("Leilão", description="Sale modality")
    closing_date: Optional[str] = Field(None, description="Closing date (YYYY-MM-DD)")
    occupancy_status: OccupancyStatus = Field(OccupancyStatus.UNKNOWN, description="Occupancy")
    area: Optional[str] = Field(None, description="Area descriptor")
    source: str = Field(..., description="Origin site")
    link: str = Field("", description="Listing URL")
    is_new: bool = Field(False, description="Not present in previous snapshot")
    is_priority: bool = Field(False, description="In a priority neighborhood")

    @field_validator("occupancy_status", mode="before")
    @classmethod
    def normalize_occupancy(cls, v):
        """Map source occupancy wording onto OccupancyStatus."""
        if v is None:
            return OccupancyStatus.UNKNOWN
        if isinstance(v, str):
            key = v.strip().lower()
            return _OCCUPANCY_ALIASES.get(key, key)
        return v

    @field_validator("area")
    @classmethod
    def empty_area_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank area labels as missing."""
        if v is not None and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def derive_discount(self) -> "AuctionProperty":
        """Fill a missing discount from the appraisal and bid price."""
        if self.discount_percent is None and self.appraised_value:
            self.discount_percent = calculate_discount(self.appraised_value, self.bid_price)
        return self

    def has_discount(self) -> bool:
        """Check if a non-zero discount is known."""
        return bool(self.discount_percent)

    def has_appraisal(self) -> bool:
        """Check if a non-zero appraisal is known."""
        return bool(self.appraised_value)

    def has_known_occupancy(self) -> bool:
        return self.occupancy_status != OccupancyStatus.UNKNOWN

    def to_dict(self) -> dict:
        """Convert to a JSON-serialisable dictionary."""
        return self.model_dump(mode="json")

    class Config:
        """Pydantic model configuration."""
        str_strip_whitespace = True
        validate_assignment = True
