"""
Shared fixtures for auction tracker tests
"""
import pytest

from src.auction_tracker.models.property import AuctionProperty


@pytest.fixture
def make_property():
    """Factory for AuctionProperty with sensible defaults."""
    def _make(id="test-1", address="Rua das Flores, 123 - Batel", **overrides):
        data = {
            "id": id,
            "property_type": "Apartamento",
            "neighborhood": "Batel",
            "address": address,
            "bid_price": 300000.0,
            "source": "Test Source",
            "link": f"https://example.com/{id}",
        }
        data.update(overrides)
        return AuctionProperty(**data)
    return _make
