# ============================================================================
# FILE: src/lab_report_extraction/validators/reference_boundary.py
# ============================================================================
"""
Reference Range Boundary Filter (HbA1c)

HbA1c reports print interpretation bands next to the result:

    Non diabetic   : 4.0 to 6.0 %
    Good control   : 6.0 to 7.0 %
    Poor control   : > 8.0 %

so a bare "6.0 %" near an HbA1c label is often a band edge, not the result.
Values of exactly 4.0, 6.0 or 8.0 are treated as boundaries when range
wording appears around them; every other value passes untouched.
"""

import re
import logging

from ..constants import REFERENCE_BOUNDARY_VALUES

logger = logging.getLogger(__name__)

RANGE_CONTEXT = re.compile(
    r"\bto\b|\band\b|\d\s*[-–]\s*\d|[<>]\s*\d|range|diabetic|\bnon\b"
    r"|control|\bgood\b|\bfair\b|\bpoor\b|normal\s+value",
    re.IGNORECASE,
)


def is_boundary_value(value: float) -> bool:
    return value in REFERENCE_BOUNDARY_VALUES


def has_range_context(text: str, position: int, window: int = 50) -> bool:
    """True if range wording appears within `window` characters of `position`."""
    context = text[max(0, position - window):position + window]
    return RANGE_CONTEXT.search(context) is not None


def is_reference_boundary(value: float, text: str, position: int, window: int = 50) -> bool:
    """
    Decide whether an HbA1c candidate is really a reference range bound.

    Args:
        value: Parsed candidate value
        text: Full source text
        position: Offset of the candidate in `text`
        window: Characters inspected on each side

    Returns:
        True if the candidate should be rejected
    """
    if not is_boundary_value(value):
        return False

    if position is None or position < 0:
        # Without a position there is no context to clear the value
        return True

    if has_range_context(text, position, window):
        logger.debug(f"HbA1c {value} at {position} looks like a reference range bound")
        return True

    return False
