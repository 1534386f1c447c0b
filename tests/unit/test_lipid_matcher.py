# ============================================================================
# FILE: tests/unit/test_lipid_matcher.py
# ============================================================================
"""
Unit tests for the total cholesterol matcher
"""

import pytest

from lab_report_extraction import extract
from lab_report_extraction.matchers.lipid import is_fraction_label


@pytest.mark.parametrize("text, expected", [
    ("Total Cholesterol: 214 mg/dl\n", "214"),
    ("SERUM CHOLESTROL : 186 mgs/dl\n", "186"),
    ("Cholesterol, Total   198 mg/dl\n", "198"),
    ("Total Cholesterol\n245 mg/dl\n", "245"),
    ("Total Cholesterol   150 - 200   232 mg/dl\n", "232"),
])
def test_total_cholesterol(text, expected):
    assert extract(text, []).total_cholesterol == expected


def test_fraction_rows_are_skipped():
    """HDL/LDL rows are fractions, not the total"""
    text = (
        "LDL Cholesterol: 130 mg/dl\n"
        "Total Cholesterol: 210 mg/dl\n"
    )

    assert extract(text, []).total_cholesterol == "210"


def test_only_fraction_rows():
    text = (
        "HDL Cholesterol: 145 mg/dl\n"
        "LDL - Cholesterol : 160 mg/dl\n"
    )

    assert extract(text, []).total_cholesterol == ""


@pytest.mark.parametrize("text", [
    "Total Cholesterol: 450 mg/dl\n",
    "Total Cholesterol: 85 mg/dl\n",
])
def test_cholesterol_out_of_range(text):
    assert extract(text, []).total_cholesterol == ""


def test_is_fraction_label():
    line = "VLDL Cholesterol 30"

    assert is_fraction_label(line, line.index("Cholesterol"))
    assert not is_fraction_label("Total Cholesterol", 6)
