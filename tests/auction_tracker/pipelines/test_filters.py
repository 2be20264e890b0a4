"""
Unit tests for listing filters and priority tagging
"""
import pytest

from src.auction_tracker.pipelines.config import PipelineConfig
from src.auction_tracker.pipelines.filters import (
    annotate_priority,
    filter_properties,
    is_priority_neighborhood,
    meets_filters,
)


@pytest.fixture
def config():
    return PipelineConfig(priority_neighborhoods=("Batel", "Água Verde", "Bigorrilho"))


class TestMeetsFilters:
    """Tests for meets_filters"""

    @pytest.mark.parametrize("discount,expected", [
        (None, False),
        (0, False),
        (39.9, False),
        (40, True),
        (65, True),
    ])
    def test_minimum_discount(self, make_property, config, discount, expected):
        """Test the minimum discount is inclusive and a missing discount fails"""
        prop = make_property(discount_percent=discount)
        assert meets_filters(prop, config) is expected

    @pytest.mark.parametrize("price,expected", [
        (800000, True),
        (800001, False),
        (0, True),
    ])
    def test_price_cap(self, make_property, config, price, expected):
        """Test the price cap is inclusive"""
        prop = make_property(discount_percent=50, bid_price=price)
        assert meets_filters(prop, config) is expected

    def test_filter_properties_preserves_order(self, make_property, config):
        """Test that kept listings stay in input order"""
        props = [
            make_property(id="a", discount_percent=50),
            make_property(id="b", discount_percent=10),
            make_property(id="c", discount_percent=45),
        ]

        assert [p.id for p in filter_properties(props, config)] == ["a", "c"]


class TestPriorityNeighborhood:
    """Tests for is_priority_neighborhood"""

    @pytest.mark.parametrize("neighborhood,expected", [
        ("Batel", True),
        ("BATEL", True),
        ("água verde", True),
        ("Agua Verde (Curitiba)", True),
        ("Verde", True),
        ("Sítio Cercado", False),
        ("", False),
    ])
    def test_matching(self, config, neighborhood, expected):
        """Test case/accent-insensitive substring matching in both directions"""
        assert is_priority_neighborhood(neighborhood, config) is expected

    def test_no_priority_list(self):
        """Test that nothing is priority without configured neighborhoods"""
        assert is_priority_neighborhood("Batel", PipelineConfig()) is False

    def test_annotate_priority_returns_copies(self, make_property, config):
        """Test that tagging does not modify the input listings"""
        props = [
            make_property(id="a", neighborhood="Batel"),
            make_property(id="b", neighborhood="Cajuru"),
        ]

        tagged = annotate_priority(props, config)

        assert [p.is_priority for p in tagged] == [True, False]
        assert props[0].is_priority is False
