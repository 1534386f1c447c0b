# ============================================================================
# src/lab_report_extraction/constants/stoplists.py
# ============================================================================
"""
Exclusion Stoplists

Noise words that show up next to name-like labels on lab reports: section
labels, organisational suffixes, staff titles, vendor names. A candidate
containing any of these as a whole word is not a person/lab name.

Entries are regex fragments so that spelling variants share one entry.
"""

import re

from .field_names import PATIENT_NAME, LAB_NAME, DOCTOR_NAME

PATIENT_NAME_STOPWORDS = (
    "years", "age", "sex", "gender", "male", "female",
    "lab", "labs", r"laborator(?:y|ies)", r"diagnostics?",
    "report", "date", "blood", "sugar", "glucose", "hba1c",
    "patient", "name", "doctor", "dr", "ref", "by",
    "sample", "collection", "received", "reported",
    "technician", "microbiologist",
    "unit", "group", "vignash", "jeyasurya", "mount", r"st\.?\s*vincent",
    "established", "estd",
    "superspeciality", "speciality", r"hospitals?", r"cent(?:re|er)",
    "vascular", "renal", "clinic", "medical", "and",
    "result", "test", "investigation", "reference", "method", "specimen", "page",
    # Test rows and section titles that look like a bare header name
    r"cholest(?:erol|rol|ral)", "total", "serum", "plasma", "lipid", "profile",
    "hb", r"ha?emoglobin", r"glycated", "fasting", "prandial", "post", "random",
    "hdl", "ldl", "vldl", r"triglycerides?", r"biochemistry", r"ha?ematology",
    "department", "panel",
)

LAB_NAME_STOPWORDS = (
    "patient", "name", "age", "sex", "gender", "doctor",
    "blood", "sugar", "glucose", "report", "date",
    "sample", "collection", "received", "reported",
)

DOCTOR_NAME_STOPWORDS = (
    "patient", "name", "age", "sex", "gender",
    "blood", "sugar", "glucose", "report", "date",
    "sample", "collection", "received", "reported",
    "technician", "microbiologist", r"labs?", r"laborator(?:y|ies)",
    r"diagnostics?", r"hospitals?", r"cent(?:re|er)", "clinic",
)

# Whole-value section headers rejected during normalization
SECTION_HEADERS = {
    PATIENT_NAME: (
        "years", "age", "sex", "gender", "male", "female", "lab", "doctor", "dr",
        "blood", "sugar", "technician", "microbiologist", "unit", "group",
        "vignash", "jeyasurya", "mount", r"st\.?\s*vincent",
    ),
    LAB_NAME: (
        "patient", "name", "age", "sex", "gender", "doctor", "dr", "blood", "sugar",
    ),
    DOCTOR_NAME: (
        "patient", "name", "age", "sex", "gender", "blood", "sugar", "report",
        "date", "sample", "collection", "received", "reported",
    ),
}

# Vendor names recognised on their own, even without a lab suffix
KNOWN_LAB_PATTERNS = (
    r"jothi\s+x[\s-]?ray",
    r"jeyasurya\s+lab",
    r"mount\s+superspeciality",
    r"mount\s+superspeciafity",
    r"st\.?\s*vincent",
    r"thyrocare",
    r"sam\s+diagnostics",
)


def compile_word_list(words) -> re.Pattern:
    """Compile a stoplist into a single whole-word, case-insensitive pattern."""
    return re.compile(r"\b(?:" + "|".join(words) + r")\b", re.IGNORECASE)


def compile_full_match(words) -> re.Pattern:
    """Compile a header list into a pattern that must match the whole value."""
    return re.compile(r"^(?:" + "|".join(words) + r")$", re.IGNORECASE)


STOPLISTS = {
    PATIENT_NAME: compile_word_list(PATIENT_NAME_STOPWORDS),
    LAB_NAME: compile_word_list(LAB_NAME_STOPWORDS),
    DOCTOR_NAME: compile_word_list(DOCTOR_NAME_STOPWORDS),
}

SECTION_HEADER_PATTERNS = {
    field_name: compile_full_match(words)
    for field_name, words in SECTION_HEADERS.items()
}
