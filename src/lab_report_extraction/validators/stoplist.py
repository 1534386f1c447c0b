# ============================================================================
# FILE: src/lab_report_extraction/validators/stoplist.py
# ============================================================================
"""
Stoplist checks for free-text fields (patient, lab and doctor names).
"""

from typing import Optional

from ..constants import STOPLISTS, SECTION_HEADER_PATTERNS


def find_excluded_word(field_name: str, value: str) -> Optional[str]:
    """Return the first stoplisted word in `value`, or None."""
    pattern = STOPLISTS.get(field_name)
    if pattern is None:
        return None
    match = pattern.search(value)
    return match.group(0) if match else None


def is_excluded(field_name: str, value: str) -> bool:
    return find_excluded_word(field_name, value) is not None


def is_section_header(field_name: str, value: str) -> bool:
    """True if the whole value is a bare section label like 'AGE' or 'Doctor'."""
    pattern = SECTION_HEADER_PATTERNS.get(field_name)
    return bool(pattern and pattern.match(value.strip()))
