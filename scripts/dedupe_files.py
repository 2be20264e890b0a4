"""
Deduplicate listing JSON files

Loads one JSON array of listings per file (one file per source), runs
deduplication and ranking and prints the result as JSON.

Usage:
    python scripts/dedupe_files.py zuk.json caixa.json leilaoimovel.json
"""
import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

# Add parent directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.auction_tracker.pipelines.config import PipelineConfig
from src.auction_tracker.pipelines.deduplication import PropertyDeduplicator
from src.auction_tracker.pipelines.ranking import rank_properties
from src.auction_tracker.pipelines.runner import validate_batch
from src.auction_tracker.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def load_batch(path: Path) -> list:
    """Load one source file; unreadable files give an empty batch."""
    try:
        with open(path, encoding="utf-8") as f:
            content = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("batch_load_failed", path=str(path), error=str(e))
        return []

    batch = validate_batch(content if isinstance(content, list) else [])
    logger.info("batch_loaded", path=str(path), properties=len(batch))
    return batch


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Deduplicate and rank listing JSON files.")
    parser.add_argument("files", nargs="+", type=Path, help="JSON files, one per source")
    parser.add_argument("--threshold", type=float, default=None, help="Address similarity threshold override")
    args = parser.parse_args(argv)

    # Logs go to stderr so stdout stays valid JSON
    setup_logging(stream=sys.stderr)

    config = PipelineConfig.from_settings()
    if args.threshold is not None:
        config = replace(config, dedup_similarity_threshold=args.threshold)

    batches = [load_batch(path) for path in args.files]
    unique = rank_properties(PropertyDeduplicator(config).dedupe(batches))

    json.dump([prop.to_dict() for prop in unique], sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
