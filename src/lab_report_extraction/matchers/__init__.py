# ============================================================================
# src/lab_report_extraction/matchers/__init__.py
# ============================================================================
"""
Field matchers, one strategy chain per extracted field.
"""

from typing import List, Optional

from ..config import ThresholdSettings, threshold_settings
from ..constants import FIELD_NAMES
from .base import Candidate, FieldMatcher, LineStrategy, TextStrategy
from .patient import build_patient_matchers
from .organization import build_organization_matchers
from .practitioner import build_practitioner_matchers
from .glycemic import build_glycemic_matchers
from .lipid import build_lipid_matchers


def build_default_matchers(settings: Optional[ThresholdSettings] = None) -> List[FieldMatcher]:
    """All nine matchers in canonical field order."""
    settings = settings or threshold_settings
    matchers = (
        build_patient_matchers(settings)
        + build_organization_matchers(settings)
        + build_practitioner_matchers(settings)
        + build_glycemic_matchers(settings)
        + build_lipid_matchers(settings)
    )
    order = {name: i for i, name in enumerate(FIELD_NAMES)}
    return sorted(matchers, key=lambda m: order[m.field_name])


__all__ = [
    'Candidate',
    'FieldMatcher',
    'LineStrategy',
    'TextStrategy',
    'build_default_matchers',
]
