# ============================================================================
# FILE: src/lab_report_extraction/validators/__init__.py
# ============================================================================
"""
Validators Package

Gates applied to every candidate before it is accepted:
- Plausibility checks (numeric ranges, text lengths)
- Reference range boundary filter (HbA1c)
- Exclusion stoplists (names)
"""

from .plausibility import (
    PlausibilityChecker,
    is_plausible,
    get_plausibility_range
)
from .reference_boundary import (
    is_reference_boundary,
    has_range_context,
)
from .stoplist import (
    find_excluded_word,
    is_excluded,
    is_section_header,
)

__all__ = [
    # Plausibility checks
    'PlausibilityChecker',
    'is_plausible',
    'get_plausibility_range',

    # Reference range boundaries
    'is_reference_boundary',
    'has_range_context',

    # Stoplists
    'find_excluded_word',
    'is_excluded',
    'is_section_header',
]
