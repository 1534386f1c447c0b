# ============================================================================
# src/lab_report_extraction/constants/field_names.py
# ============================================================================
"""
Extracted Field Names
- Canonical field order (used for result layout and flag ordering)
- Legacy report export keys
"""

PATIENT_NAME = "patient_name"
AGE = "age"
GENDER = "gender"
LAB_NAME = "lab_name"
DOCTOR_NAME = "doctor_name"
BLOOD_SUGAR_FASTING = "blood_sugar_fasting"
BLOOD_SUGAR_PP = "blood_sugar_pp"
HBA1C_VALUE = "hba1c_value"
TOTAL_CHOLESTEROL = "total_cholesterol"

FIELD_NAMES = (
    PATIENT_NAME,
    AGE,
    GENDER,
    LAB_NAME,
    DOCTOR_NAME,
    BLOOD_SUGAR_FASTING,
    BLOOD_SUGAR_PP,
    HBA1C_VALUE,
    TOTAL_CHOLESTEROL,
)

# Fields whose values are free text rather than numbers
TEXT_FIELDS = (PATIENT_NAME, LAB_NAME, DOCTOR_NAME)

# Keys used by the report export format (order matters for display)
REPORT_JSON_KEYS = {
    PATIENT_NAME: "patient_name",
    AGE: "age",
    GENDER: "gender",
    DOCTOR_NAME: "doctor_name",
    LAB_NAME: "lab_name",
    BLOOD_SUGAR_FASTING: "sugar_fasting",
    BLOOD_SUGAR_PP: "sugar_pp",
    HBA1C_VALUE: "hba1c",
    TOTAL_CHOLESTEROL: "total_cholestral",
}

# Literal accepted for self-referred patients
SELF_REFERRAL = "SELF"

GENDER_VALUES = {"M": "MALE", "F": "FEMALE"}
