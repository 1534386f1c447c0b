# src/lab_report_extraction/utils/parsing.py
"""
Small parsing helpers shared by matchers and the normalizer.
"""

import re
from typing import Optional

_WHITESPACE = re.compile(r"\s+")


def parse_numeric_value(raw: str) -> Optional[float]:
    """Parse a captured number, returning None for anything non-numeric."""
    if raw is None:
        return None
    try:
        return float(str(raw).strip())
    except ValueError:
        return None


def collapse_whitespace(value: str) -> str:
    """Collapse runs of whitespace to single spaces and trim."""
    return _WHITESPACE.sub(" ", value or "").strip()


def clean_trailing_punctuation(value: str) -> str:
    """Drop trailing commas/spaces left behind by lazy captures."""
    return re.sub(r"[,\s]+$", "", value or "")
