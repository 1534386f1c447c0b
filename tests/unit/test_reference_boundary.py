# ============================================================================
# FILE: tests/unit/test_reference_boundary.py
# ============================================================================
"""
Unit tests for the HbA1c reference boundary filter and the name stoplists
"""

import pytest

from lab_report_extraction.validators import (
    find_excluded_word,
    has_range_context,
    is_excluded,
    is_reference_boundary,
    is_section_header,
)


def test_non_boundary_values_pass():
    """Only 4.0, 6.0 and 8.0 are ever treated as boundaries"""
    text = "Non diabetic: 4.0 to 6.0 %  HbA1c 5.4 %"

    assert not is_reference_boundary(5.4, text, text.index("5.4"))
    assert not is_reference_boundary(7.0, "Good control 6.0 to 7.0", 20)


@pytest.mark.parametrize("text", [
    "Normal Value: 4.0 to 6.0 %",
    "Reference range 4.0 - 6.0",
    "Good control: 6.0",
    "Diabetic > 8.0 %",
    "Non diabetic 6.0",
])
def test_boundary_with_range_wording(text):
    position = text.index("6.0") if "6.0" in text else text.index("8.0")
    value = float(text[position:position + 3])

    assert is_reference_boundary(value, text, position)


def test_boundary_without_range_wording():
    """A boundary value reported on its own is a result"""
    text = "HbA1c: 6.0 %"

    assert not is_reference_boundary(6.0, text, 7)


def test_boundary_without_position():
    """No position, no context to clear the value"""
    assert is_reference_boundary(8.0, "HbA1c: 8.0 %", -1)


def test_range_context_window():
    """Wording outside the window does not count"""
    text = "Normal value" + " " * 80 + "HbA1c: 6.0 %"
    position = text.index("6.0")

    assert not has_range_context(text, position, window=50)
    assert has_range_context(text, position, window=100)


def test_single_dash_is_not_range_wording():
    """A bare dash (date, separator) is not a range"""
    text = "HbA1c - 6.0 %"

    assert not has_range_context(text, text.index("6.0"))


# ============================================================================
# STOPLISTS
# ============================================================================

def test_find_excluded_word():
    assert find_excluded_word("patient_name", "LABORATORY TECHNICIAN") == "LABORATORY"
    assert find_excluded_word("patient_name", "JOHN DOE") is None
    assert find_excluded_word("gender", "anything") is None


def test_whole_word_matching():
    """Stopwords inside longer names are not matches"""
    assert not is_excluded("patient_name", "ANDREW AGEMAN")
    assert is_excluded("patient_name", "PATIENT AGE")


def test_doctor_and_lab_stoplists():
    assert is_excluded("doctor_name", "City Diagnostics")
    assert is_excluded("lab_name", "Patient Report")
    assert not is_excluded("lab_name", "City Care Diagnostics")


def test_is_section_header():
    assert is_section_header("patient_name", "AGE")
    assert is_section_header("doctor_name", " Sample ")
    assert not is_section_header("patient_name", "AGE GROUP")
    assert not is_section_header("gender", "MALE")
