"""
Record Normalizer

Canonicalizes raw listing fields (Brazilian currency strings, DD/MM/YYYY dates,
accented text) into typed values. Malformed input yields None, never an error.
"""
import math
import re
import unicodedata
from typing import Optional

# DD/MM/YYYY, optionally followed by "às 11:08" or similar
_BR_DATE_PATTERN = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})")


def parse_price(value: Optional[str]) -> Optional[float]:
    """
    Parse a Brazilian currency string.

    "R$ 383.675,28" -> 383675.28

    Args:
        value: Raw price text

    Returns:
        Parsed amount or None for non-numeric input
    """
    if value is None:
        return None

    text = str(value).strip()
    if not text:
        return None

    # Drop currency symbol and thousands separators, then switch decimal comma
    cleaned = re.sub(r"[^\d,]", "", text).replace(",", ".", 1)
    if not cleaned or cleaned == ".":
        return None

    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_br_date(value: Optional[str]) -> Optional[str]:
    """
    Convert a DD/MM/YYYY date (with optional trailing time text) to YYYY-MM-DD.

    Args:
        value: Raw date text

    Returns:
        ISO date string or None if no date is found
    """
    if not value:
        return None

    match = _BR_DATE_PATTERN.search(value)
    if not match:
        return None

    day, month, year = match.groups()
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def normalize_text(value: Optional[str]) -> str:
    """
    Normalize text for comparison: strip diacritics, lowercase, trim.

    Used as the address key for deduplication and neighborhood matching.
    """
    if not value:
        return ""
    decomposed = unicodedata.normalize("NFD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.lower().strip()


def calculate_discount(appraised_value: Optional[float], bid_price: Optional[float]) -> Optional[int]:
    """
    Discount of the bid over the appraisal, rounded to a whole percent.

    Returns:
        Discount percent or None when the appraisal is missing or zero
    """
    if not appraised_value or bid_price is None:
        return None
    # Half-up rounding: 42.5 -> 43
    return math.floor((appraised_value - bid_price) / appraised_value * 100 + 0.5)


def title_case(value: str) -> str:
    """Title-case each word ("AGUA VERDE" -> "Agua Verde")."""
    return re.sub(r"\w\S*", lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), value)
