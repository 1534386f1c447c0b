# ============================================================================
# src/lab_report_extraction/constants/plausibility_ranges.py
# ============================================================================
"""
Plausibility Ranges

These are "physically possible on a report" boundaries, not reference ranges.
A syntactically valid match outside its range is a misread or a different
number on the page (reference range, phone number, page total) and is dropped.

Numeric ranges are half-open: min <= value < max.
"""

from .field_names import (
    AGE,
    BLOOD_SUGAR_FASTING,
    BLOOD_SUGAR_PP,
    HBA1C_VALUE,
    TOTAL_CHOLESTEROL,
    PATIENT_NAME,
    DOCTOR_NAME,
    LAB_NAME,
)

# field_name: (min_inclusive, max_exclusive, unit)
PLAUSIBILITY_RANGES = {
    AGE: (18, 150, "years"),
    BLOOD_SUGAR_FASTING: (50, 500, "mg/dL"),
    BLOOD_SUGAR_PP: (50, 500, "mg/dL"),
    HBA1C_VALUE: (3.0, 15.0, "%"),
    TOTAL_CHOLESTEROL: (100, 400, "mg/dL"),
}

# Minors are only kept tentatively until the age re-check runs
MINOR_AGE_RANGE = (1, 18)

# field_name: (min_length, max_length), both inclusive, None = unbounded
TEXT_LENGTH_LIMITS = {
    PATIENT_NAME: (3, 49),
    DOCTOR_NAME: (4, 99),
    LAB_NAME: (5, None),
}

# HbA1c values that commonly appear as reference-range boundaries
REFERENCE_BOUNDARY_VALUES = (4.0, 6.0, 8.0)
