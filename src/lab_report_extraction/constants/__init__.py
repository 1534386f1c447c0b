# ============================================================================
# src/lab_report_extraction/constants/__init__.py
# ============================================================================
"""
Convenient imports for all constants
"""

from .field_names import (
    PATIENT_NAME,
    AGE,
    GENDER,
    LAB_NAME,
    DOCTOR_NAME,
    BLOOD_SUGAR_FASTING,
    BLOOD_SUGAR_PP,
    HBA1C_VALUE,
    TOTAL_CHOLESTEROL,
    FIELD_NAMES,
    TEXT_FIELDS,
    REPORT_JSON_KEYS,
    SELF_REFERRAL,
    GENDER_VALUES,
)
from .plausibility_ranges import (
    PLAUSIBILITY_RANGES,
    MINOR_AGE_RANGE,
    TEXT_LENGTH_LIMITS,
    REFERENCE_BOUNDARY_VALUES,
)
from .stoplists import STOPLISTS, SECTION_HEADER_PATTERNS, KNOWN_LAB_PATTERNS
