"""
Unit tests for the record normalizer
"""
import pytest

from src.auction_tracker.transformers.normalizer import (
    calculate_discount,
    normalize_text,
    parse_br_date,
    parse_price,
    title_case,
)


class TestParsePrice:
    """Tests for parse_price"""

    def test_parse_brazilian_currency(self):
        """Test currency symbol, thousands dots and decimal comma"""
        assert parse_price("R$ 383.675,28") == 383675.28

    def test_parse_without_cents(self):
        """Test price without decimal part"""
        assert parse_price("R$ 1.000") == 1000.0

    @pytest.mark.parametrize("value", ["abc", "", "   ", None, "R$ ,"])
    def test_parse_non_numeric_returns_none(self, value):
        """Test that non-numeric input yields None"""
        assert parse_price(value) is None


class TestParseBrDate:
    """Tests for parse_br_date"""

    def test_parse_date_with_trailing_time(self):
        """Test DD/MM/YYYY followed by time text"""
        assert parse_br_date("09/02/2026 às 11:08") == "2026-02-09"

    def test_parse_single_digit_day_and_month(self):
        """Test zero padding of day and month"""
        assert parse_br_date("9/2/2026") == "2026-02-09"

    def test_parse_iso_date_returns_none(self):
        """Test that dates in other formats are rejected"""
        assert parse_br_date("2026-02-09") is None

    def test_parse_empty_returns_none(self):
        """Test empty input"""
        assert parse_br_date("") is None
        assert parse_br_date(None) is None


class TestNormalizeText:
    """Tests for normalize_text"""

    def test_strips_accents_and_lowercases(self):
        """Test diacritics removal"""
        assert normalize_text("  Água Verde ") == "agua verde"
        assert normalize_text("JUVEVÊ") == "juveve"
        assert normalize_text("Portão") == "portao"

    def test_empty_input(self):
        """Test None and empty strings"""
        assert normalize_text("") == ""
        assert normalize_text(None) == ""


class TestCalculateDiscount:
    """Tests for calculate_discount"""

    def test_discount_percent(self):
        """Test whole-percent discount"""
        assert calculate_discount(500000, 300000) == 40
        assert calculate_discount(500000, 310000) == 38

    def test_discount_rounds_half_up(self):
        """Test that 12.5% rounds to 13"""
        assert calculate_discount(8, 7) == 13

    def test_missing_appraisal(self):
        """Test that a missing or zero appraisal gives no discount"""
        assert calculate_discount(None, 100) is None
        assert calculate_discount(0, 100) is None


def test_title_case():
    """Test title casing of upper-case neighborhood names"""
    assert title_case("AGUA VERDE") == "Agua Verde"
    assert title_case("sao jose dos pinhais") == "Sao Jose Dos Pinhais"
