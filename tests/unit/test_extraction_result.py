# ============================================================================
# FILE: tests/unit/test_extraction_result.py
# ============================================================================
"""
Unit tests for ExtractionResult
"""

import json

import pytest

from lab_report_extraction.constants import FIELD_NAMES
from lab_report_extraction.core.confidence import ConfidenceThresholds
from lab_report_extraction.core.context import ExtractionResult


def test_new_result_is_empty():
    result = ExtractionResult()

    assert list(result.fields) == list(FIELD_NAMES)
    assert result.resolved_fields == []
    assert result.missing_fields == list(FIELD_NAMES)
    assert result.confidence == {}
    assert result.low_confidence_flags == []
    assert not result.requires_review


def test_set_field_keeps_value_and_confidence_together():
    result = ExtractionResult()
    result.set_field("hba1c_value", "5.6", 92.0, strategy="hba1c_inline", position=7)

    extracted = result.get_field("hba1c_value")
    assert result.hba1c_value == "5.6"
    assert extracted.confidence == 92.0
    assert extracted.strategy == "hba1c_inline"
    assert extracted.position == 7

    result.set_field("hba1c_value", "", 92.0)
    assert result.hba1c_value == ""
    assert result.get_field("hba1c_value").confidence is None


def test_unknown_field():
    result = ExtractionResult()

    with pytest.raises(KeyError):
        result.set_field("hemoglobin", "14.2", 90.0)

    with pytest.raises(AttributeError):
        result.hemoglobin


def test_low_confidence_flags_follow_field_order():
    result = ExtractionResult()
    result.set_field("hba1c_value", "5.6", 40.0)
    result.set_field("patient_name", "JOHN DOE", 59.99)
    result.set_field("age", "45", 60.0)

    assert result.low_confidence_flags == ["patient_name", "hba1c_value"]
    assert result.requires_review


def test_custom_threshold():
    result = ExtractionResult(low_confidence_threshold=80.0)
    result.set_field("age", "45", 75.0)

    assert result.low_confidence_flags == ["age"]


def test_clear_field_removes_flag():
    result = ExtractionResult()
    result.set_field("gender", "MALE", 30.0)
    result.clear_field("gender")

    assert result.low_confidence_flags == []
    assert result.get_field("gender").strategy is None


def test_to_dict():
    """Nine values plus confidence and flags, JSON-serialisable"""
    result = ExtractionResult()
    result.set_field("age", "45", 50.0)

    data = result.to_dict()

    assert [key for key in data if key in FIELD_NAMES] == list(FIELD_NAMES)
    assert data["age"] == "45"
    assert data["patient_name"] == ""
    assert data["confidence"] == {"age": 50.0}
    assert data["low_confidence_flags"] == ["age"]
    assert json.loads(json.dumps(data)) == data


def test_to_report_json():
    result = ExtractionResult()
    result.set_field("blood_sugar_fasting", "98", 50.0)
    result.set_field("total_cholesterol", "214", 50.0)

    report = result.to_report_json()

    assert report["sugar_fasting"] == "98"
    assert report["total_cholestral"] == "214"
    assert report["hba1c"] == ""
    assert len(report) == 9


def test_summary():
    result = ExtractionResult()
    result.set_field("patient_name", "JOHN DOE", 90.0, strategy="name_inline")
    result.set_field("age", "45", 80.0, strategy="age_inline")

    summary = result.get_summary()

    assert summary["resolved"] == 2
    assert summary["missing"] == 7
    assert summary["mean_confidence"] == 85.0
    assert summary["confidence_level"] == "high"
    assert summary["requires_review"] is False
    assert summary["strategies"] == {"patient_name": "name_inline", "age": "age_inline"}


def test_summary_of_empty_result():
    summary = ExtractionResult().get_summary(ConfidenceThresholds(high=90.0, medium=70.0))

    assert summary["mean_confidence"] is None
    assert summary["confidence_level"] == "none"
