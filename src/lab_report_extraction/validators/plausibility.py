# ============================================================================
# FILE: src/lab_report_extraction/validators/plausibility.py
# ============================================================================
"""
Plausibility Checks

Catches values that cannot be the result we are looking for: reference range
bounds, phone numbers, misread digits, minors' ages where an adult patient is
expected.

Example:
- Fasting blood sugar 620 mg/dL -> FAIL (outside 50-500)
- HbA1c 5.6 %                   -> PASS
"""

from typing import Optional, Tuple
import logging

from ..constants import PLAUSIBILITY_RANGES, TEXT_LENGTH_LIMITS
from ..utils.parsing import parse_numeric_value


logger = logging.getLogger(__name__)


class PlausibilityChecker:
    """
    Check extracted values against per-field plausibility limits.

    Numeric ranges are half-open (min <= value < max). Text fields are
    checked for length only; word-level exclusions live in validators.stoplist.
    """

    def __init__(self):
        self.ranges = PLAUSIBILITY_RANGES
        self.length_limits = TEXT_LENGTH_LIMITS

    def check(
        self,
        field_name: str,
        value: float,
    ) -> Tuple[bool, Optional[str]]:
        """
        Check if a numeric value is plausible.

        Args:
            field_name: Field name (e.g. "hba1c_value")
            value: Numeric value

        Returns:
            (is_plausible, reason_if_not)
        """
        # Fields without a range are not numeric
        if field_name not in self.ranges:
            return True, None

        min_val, max_val, unit = self.ranges[field_name]

        if value < min_val:
            reason = f"Value {value} below plausible minimum {min_val} {unit}"
            logger.debug(f"{field_name}: {reason}")
            return False, reason

        if value >= max_val:
            reason = f"Value {value} not below plausible maximum {max_val} {unit}"
            logger.debug(f"{field_name}: {reason}")
            return False, reason

        return True, None

    def check_raw(self, field_name: str, raw: str) -> Tuple[bool, Optional[str]]:
        """Parse a captured string and check it."""
        value = parse_numeric_value(raw)
        if value is None:
            return False, f"Not a number: {raw!r}"
        return self.check(field_name, value)

    def check_length(self, field_name: str, text: str) -> Tuple[bool, Optional[str]]:
        """
        Check a text value against the field's length limits.

        Returns:
            (is_plausible, reason_if_not)
        """
        if field_name not in self.length_limits:
            return True, None

        min_len, max_len = self.length_limits[field_name]
        length = len(text)

        if length < min_len:
            return False, f"Too short ({length} < {min_len} characters)"

        if max_len is not None and length > max_len:
            return False, f"Too long ({length} > {max_len} characters)"

        return True, None

    def get_range(self, field_name: str) -> Optional[Tuple[float, float, str]]:
        """
        Get plausibility range for a field.

        Returns:
            (min, max_exclusive, unit) or None if not numeric
        """
        return self.ranges.get(field_name)


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

_checker = PlausibilityChecker()


def is_plausible(field_name: str, raw: str) -> bool:
    """
    Quick plausibility check on a captured string.

    Returns:
        True if plausible, False otherwise
    """
    ok, _ = _checker.check_raw(field_name, raw)
    return ok


def get_plausibility_range(field_name: str) -> Optional[Tuple[float, float, str]]:
    """
    Get plausibility range for a field.

    Returns:
        (min, max_exclusive, unit) or None
    """
    return _checker.get_range(field_name)
