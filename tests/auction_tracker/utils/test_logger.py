"""
Unit tests for logging configuration
"""
from config.settings import settings
from src.auction_tracker.utils.logger import resolve_log_level


class TestResolveLogLevel:
    """Tests for resolve_log_level"""

    def test_explicit_level_wins(self, monkeypatch):
        """Test that an explicit level overrides debug mode"""
        monkeypatch.setattr(settings, "debug", True)
        assert resolve_log_level("warning") == "WARNING"

    def test_debug_mode(self, monkeypatch):
        """Test that debug mode logs at DEBUG"""
        monkeypatch.setattr(settings, "debug", True)
        monkeypatch.setattr(settings, "log_level", "INFO")
        assert resolve_log_level() == "DEBUG"

    def test_configured_level(self, monkeypatch):
        """Test the configured level outside debug mode"""
        monkeypatch.setattr(settings, "debug", False)
        monkeypatch.setattr(settings, "log_level", "error")
        assert resolve_log_level() == "ERROR"
