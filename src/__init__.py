"""
Auction Tracker - Core Package

Scrapes real-estate auction listings, filters them by price, discount and
location, deduplicates near-identical addresses across sources and keeps a
daily snapshot of the ranked result.
"""

__version__ = "0.1.0"
