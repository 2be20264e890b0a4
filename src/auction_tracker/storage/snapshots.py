"""
Snapshot Storage

One JSON file per calendar day (<data_dir>/YYYY-MM-DD.json) holding that
day's ranked listing set.
"""
import json
import os
import re
from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pydantic import ValidationError

from src.auction_tracker.models.property import AuctionProperty
from src.auction_tracker.utils.logger import get_logger

logger = get_logger(__name__)

_SNAPSHOT_NAME = re.compile(r"^(\d{4}-\d{2}-\d{2})\.json$")


class SnapshotError(Exception):
    """Raised when a snapshot file cannot be read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path


class SnapshotStore:
    """
    Reads and writes daily listing snapshots.
    """

    def __init__(self, data_dir: Optional[Union[str, Path]] = None):
        """
        Args:
            data_dir: Snapshot directory, defaults to settings.data_dir
        """
        if data_dir is None:
            from config.settings import settings
            data_dir = settings.data_dir
        self.data_dir = Path(data_dir)
        logger.debug("snapshot_store_initialized", data_dir=str(self.data_dir))

    def path_for(self, day: date) -> Path:
        return self.data_dir / f"{day.isoformat()}.json"

    def save(self, properties: Sequence[AuctionProperty], day: date) -> Path:
        """
        Write the day's snapshot, replacing any earlier file for the same day.

        Returns:
            Path of the written snapshot
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(day)
        tmp_path = path.with_suffix(".json.tmp")

        payload = [prop.to_dict() for prop in properties]
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, path)

        logger.info("snapshot_saved", path=str(path), properties=len(payload))
        return path

    def load(self, day: date) -> List[AuctionProperty]:
        """
        Load the snapshot for a given day.

        Returns:
            Listings, or an empty list if no snapshot exists

        Raises:
            SnapshotError: If the file is not a valid snapshot
        """
        path = self.path_for(day)
        if not path.exists():
            logger.info("snapshot_not_found", path=str(path))
            return []
        return self._read(path)

    def load_previous(self, day: date) -> List[AuctionProperty]:
        """Load the most recent snapshot strictly before the given day."""
        earlier = [d for d in self.list_snapshot_dates() if d < day]
        if not earlier:
            logger.info("no_previous_snapshot", before=day.isoformat())
            return []
        return self.load(earlier[-1])

    def list_snapshot_dates(self) -> List[date]:
        """Dates with a snapshot file, oldest first."""
        if not self.data_dir.is_dir():
            return []

        dates = []
        for path in self.data_dir.iterdir():
            match = _SNAPSHOT_NAME.match(path.name)
            if not match:
                continue
            try:
                dates.append(date.fromisoformat(match.group(1)))
            except ValueError:
                continue
        return sorted(dates)

    @staticmethod
    def _read(path: Path) -> List[AuctionProperty]:
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SnapshotError(path, f"unreadable snapshot: {e}") from e

        if not isinstance(data, list):
            raise SnapshotError(path, "expected a JSON array of listings")

        try:
            properties = [AuctionProperty(**item) for item in data]
        except (ValidationError, TypeError) as e:
            raise SnapshotError(path, f"invalid listing: {e}") from e

        logger.info("snapshot_loaded", path=str(path), properties=len(properties))
        return properties
