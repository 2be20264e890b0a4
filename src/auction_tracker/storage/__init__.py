"""
Storage Package

Daily snapshot files.
"""
from src.auction_tracker.storage.snapshots import SnapshotStore, SnapshotError

__all__ = ["SnapshotStore", "SnapshotError"]
