# ============================================================================
# FILE: tests/unit/test_organization_matchers.py
# ============================================================================
"""
Unit tests for the lab name matcher and lab name repair
"""

import pytest

from lab_report_extraction import extract
from lab_report_extraction.core.context import SourceText
from lab_report_extraction.matchers.base import Candidate
from lab_report_extraction.matchers.organization import (
    clean_lab_name,
    known_lab,
    lab_with_suffix,
    validate_lab_name,
)


def test_unit_of_group_full_name():
    result = extract("(A Unit of Vignash Group of Laboratories)\nHbA1c: 6.4 %\n", [])

    assert result.lab_name == "A Unit of Vignash Group of Laboratories"
    assert result.get_field("lab_name").strategy == "unit_of_group"


def test_unit_of_group_canonical_name():
    """A truncated group line is completed to the canonical name"""
    result = extract("A Unit of Vignash Group\nHbA1c: 6.4 %\n", [])

    assert result.lab_name == "A Unit of Vignash Group of Laboratories"


def test_labelled_lab_name():
    result = extract("Lab Name: City Care Diagnostics\n", [])

    assert result.lab_name == "City Care Diagnostics"
    assert result.get_field("lab_name").strategy == "lab_inline"


def test_lab_name_on_next_line():
    result = extract("Laboratory Name\nGreen Valley Clinical Lab\n", [])

    assert result.lab_name == "Green Valley Clinical Lab"


def test_letterhead_with_suffix():
    """First header line ending in a lab suffix"""
    text = "SRI BALAJI DIAGNOSTIC CENTRE\n12, Main Road, Madurai\nHbA1c: 6.4 %\n"
    result = extract(text, [])

    assert result.lab_name == "SRI BALAJI DIAGNOSTIC CENTRE"


def test_known_lab_with_suffix_lines():
    """Vendor letterhead: typo fixed, suffix lines below appended"""
    text = (
        "MOUNT SUPERSPECIAFITY\n"
        "HOSPITALS\n"
        "RENAL AND VASCULAR CENTRE\n"
        "HbA1c: 6.4 %\n"
    )
    result = extract(text, [])

    assert result.lab_name == "MOUNT Superspeciality HOSPITALS RENAL AND VASCULAR CENTRE"
    assert result.get_field("lab_name").strategy == "known_lab"


def test_known_lab_takes_whole_line():
    source = SourceText("Report\nThyrocare Technologies Ltd\n")

    found = list(known_lab(source))

    assert found[0].value == "Thyrocare Technologies Ltd"
    assert found[0].position == source.lines[1].offset


def test_suffix_match_stays_on_one_line():
    source = SourceText("Patient Details\nSUNRISE DIAGNOSTICS\n")

    values = [c.value for c in lab_with_suffix(source)]

    assert values == ["SUNRISE DIAGNOSTICS"]


def test_no_lab_name():
    result = extract("Fasting Blood Sugar: 98 mg/dl\n", [])

    assert result.lab_name == ""


def test_clean_lab_name():
    assert clean_lab_name("  City  Care Labs, ") == "City Care Labs"


@pytest.mark.parametrize("name, expected", [
    ("City Care Diagnostics", True),
    ("Labs", False),
    ("Patient Report Centre", False),
])
def test_validate_lab_name(name, expected):
    ok, _ = validate_lab_name(Candidate(value=name), SourceText(name))

    assert ok is expected
