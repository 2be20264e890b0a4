"""
Address Similarity

Bigram-overlap (Sørensen–Dice) similarity between normalized address strings.
"""
import re
from collections import Counter
from typing import Optional

from src.auction_tracker.transformers.normalizer import normalize_text
from src.auction_tracker.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_THRESHOLD = 0.85

# Whitespace and punctuation carry no signal for street matching
_NON_ALNUM = re.compile(r"[\W_]+")


def _compact(text: str) -> str:
    return _NON_ALNUM.sub("", text)


def _bigrams(text: str) -> Counter:
    return Counter(text[i:i + 2] for i in range(len(text) - 1))


def similarity(a: str, b: str) -> float:
    """
    Dice coefficient over character bigrams.

    Both inputs are expected to be normalized already (see normalize_text);
    whitespace and punctuation are ignored.

    Args:
        a: First normalized string
        b: Second normalized string

    Returns:
        Score in [0, 1]; 1.0 for identical strings
    """
    first = _compact(a)
    second = _compact(b)

    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    first_bigrams = _bigrams(first)
    second_bigrams = _bigrams(second)
    overlap = sum((first_bigrams & second_bigrams).values())

    return 2.0 * overlap / (len(first) + len(second) - 2)


class AddressMatcher:
    """
    Decides whether two addresses refer to the same property.

    Addresses are compared on their normalized form; a pair is a duplicate
    when its similarity reaches the threshold (inclusive).
    """

    def __init__(self, threshold: Optional[float] = None):
        """
        Initialize matcher.

        Args:
            threshold: Duplicate threshold in [0, 1] (default 0.85)
        """
        self.threshold = DEFAULT_THRESHOLD if threshold is None else threshold
        if not 0.0 <= self.threshold <= 1.0:
            raise ValueError(f"similarity threshold must be within [0, 1], got {self.threshold}")
        logger.debug("address_matcher_initialized", threshold=self.threshold)

    @staticmethod
    def key(address: str) -> str:
        """Comparison key for an address."""
        return normalize_text(address)

    def score(self, key_a: str, key_b: str) -> float:
        return similarity(key_a, key_b)

    def is_duplicate_score(self, score: float) -> bool:
        return score >= self.threshold

    def matches(self, key_a: str, key_b: str) -> bool:
        """Check whether two address keys are duplicates."""
        return self.is_duplicate_score(self.score(key_a, key_b))
