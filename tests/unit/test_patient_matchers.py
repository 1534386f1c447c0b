# ============================================================================
# FILE: tests/unit/test_patient_matchers.py
# ============================================================================
"""
Unit tests for patient name, age and gender matchers
"""

import pytest

from lab_report_extraction import extract
from lab_report_extraction.config import threshold_settings
from lab_report_extraction.core.context import SourceText
from lab_report_extraction.matchers.base import Candidate
from lab_report_extraction.matchers.patient import (
    build_patient_matchers,
    clean_name,
    name_header_scan,
    normalize_gender,
    validate_age,
    validate_patient_name,
)


@pytest.fixture
def patient_matchers():
    name, age, gender = build_patient_matchers(threshold_settings)
    return {"name": name, "age": age, "gender": gender}


# ============================================================================
# PATIENT NAME
# ============================================================================

def test_name_with_prefix_and_trailing_age():
    """Honorific dropped, trailing age label trimmed"""
    result = extract("Name: Mrs. LAKSHMI DEVI   Age: 52 Years\n", [])

    assert result.patient_name == "LAKSHMI DEVI"
    assert result.age == "52"


def test_name_on_next_line():
    """Label alone on a line, name below it"""
    result = extract("Patient Name\nRAVI SHANKAR\nAge: 38 Years\n", [])

    assert result.patient_name == "RAVI SHANKAR"
    assert result.get_field("patient_name").strategy == "name_next_line"


def test_prefixed_name_in_narrative():
    """Mr./Mrs. prefix without a Name label"""
    result = extract("Report for Mr. SURESH KUMAR Date: 12/03/2024\n", [])

    assert result.patient_name == "SURESH KUMAR"


def test_bare_header_name():
    """A capitalised letters-only line near the top"""
    result = extract("ANITHA RAJ\nHbA1c: 6.2 %\n", [])

    assert result.patient_name == "ANITHA RAJ"
    assert result.get_field("patient_name").strategy == "name_header_scan"


def test_lab_name_label_is_not_patient_name():
    """'Lab Name:' does not count as a name label"""
    result = extract("Lab Name: City Care Diagnostics\n", [])

    assert result.patient_name == ""
    assert result.lab_name == "City Care Diagnostics"


def test_header_scan_skips_stoplisted_lines():
    source = SourceText("BLOOD SUGAR REPORT\nPRIYA NAIR\n")
    name_matcher = build_patient_matchers(threshold_settings)[0]

    accepted = name_matcher.match_text(source)

    assert accepted.value == "PRIYA NAIR"


@pytest.mark.parametrize("text", [
    "Total Cholesterol\n214 mg/dl\n",
    "LIPID PROFILE\nSerum Cholestrol: 214 mg/dl\n",
    "HAEMOGLOBIN\nGlycated Hb: 6.2 %\n",
    "Post Prandial\n182 mg/dl\n",
])
def test_test_names_are_not_patient_names(text):
    """Test rows and section titles at the top of a report are not names"""
    result = extract(text, [])

    assert result.patient_name == ""


def test_header_scan_skips_section_title():
    source = SourceText("LIPID PROFILE\nKAVITHA MOHAN\n")
    name_matcher = build_patient_matchers(threshold_settings)[0]

    accepted = name_matcher.match_text(source)

    assert accepted.value == "KAVITHA MOHAN"


def test_header_scan_limit():
    source = SourceText("line one 1\nline two 2\nMEENA KRISHNAN\n")

    found = [c.value for c in name_header_scan(source, max_lines=2)]

    assert "MEENA KRISHNAN" not in found


def test_clean_name():
    assert clean_name("JOHN DOE   Age") == "JOHN DOE"
    assert clean_name("JOHN  DOE Sex M") == "JOHN DOE"
    assert clean_name("JOHN DOE") == "JOHN DOE"


@pytest.mark.parametrize("name, expected", [
    ("JOHN DOE", True),
    ("ANDREW MATHEW", True),
    ("LABORATORY TECHNICIAN", False),
    ("Blood Sugar", False),
    ("JO", False),
    ("JOHN 2", False),
    ("A" * 50, False),
])
def test_validate_patient_name(name, expected):
    """Alphabetic, sensible length, no noise words"""
    ok, _ = validate_patient_name(Candidate(value=name), SourceText(name))

    assert ok is expected


# ============================================================================
# AGE
# ============================================================================

def test_age_with_sex_companion():
    """'Age / Sex : 34 Y / F' fills age and gender"""
    result = extract("Age / Sex : 34 Y / F\n", [])

    assert result.age == "34"
    assert result.gender == "FEMALE"


def test_age_on_next_line():
    result = extract("Age\n61 Yrs\n", [])

    assert result.age == "61"


def test_age_in_years_narrative():
    result = extract("The patient is a 60 year old male with diabetes\n", [])

    assert result.age == "60"
    assert result.gender == "MALE"


def test_age_slash_gender_narrative():
    result = extract("RAMESH BABU 47/M\n", [])

    assert result.age == "47"
    assert result.gender == "MALE"


@pytest.mark.parametrize("text", [
    "Age: 160 Years\n",
    "Age: 9 Years\n",
])
def test_implausible_age_is_dropped(text):
    result = extract(text, [])

    assert result.age == ""


def test_adult_age_preferred_over_minor_age():
    """A later adult age wins over a minor's age"""
    text = "Age: 12 Years\nAge 45 M\n"
    result = extract(text, [])

    assert result.age == "45"


def test_validate_age_tentative():
    """Tentative candidates are only valid as minors"""
    source = SourceText("")

    assert validate_age(Candidate(value="12", tentative=True), source)[0]
    assert not validate_age(Candidate(value="45", tentative=True), source)[0]
    assert not validate_age(Candidate(value="12"), source)[0]
    assert validate_age(Candidate(value="45"), source)[0]


# ============================================================================
# GENDER
# ============================================================================

@pytest.mark.parametrize("text, expected", [
    ("Sex: Female\n", "FEMALE"),
    ("Gender : M\n", "MALE"),
    ("Gender\nF\n", "FEMALE"),
    ("Patient is a male aged 60\n", "MALE"),
    ("Patient is a female aged 60\n", "FEMALE"),
])
def test_gender(text, expected):
    assert extract(text, []).gender == expected


def test_lowercase_letter_is_not_gender():
    """Lone letters only count when capitalised"""
    assert extract("value m\n", []).gender == ""


def test_normalize_gender():
    assert normalize_gender("m") == "MALE"
    assert normalize_gender("Female") == "FEMALE"
    assert normalize_gender("x") == ""


def test_matcher_cues(patient_matchers):
    """Line strategies only run on lines carrying the label"""
    assert patient_matchers["name"].has_cue("Patient Name: JOHN")
    assert patient_matchers["age"].has_cue("Age/Sex: 45/M")
    assert patient_matchers["gender"].has_cue("Sex: M")
    assert not patient_matchers["age"].has_cue("Page 2 of 3")
