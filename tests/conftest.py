# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import pytest

from lab_report_extraction.core.context import RecognizedWord, SourceText
from lab_report_extraction.core.orchestrator import ExtractionOrchestrator


@pytest.fixture
def simple_report_text():
    """Minimal report: name, age/sex, fasting sugar and HbA1c"""
    return (
        "Patient Name: Mr JOHN DOE\n"
        "Age/Sex: 45/M\n"
        "Fasting Blood Sugar: 98 mg/dl\n"
        "HBA1C (BIORAD): 5.6%\n"
    )


@pytest.fixture
def tabular_report_text():
    """Table-style report with labels and values on separate lines"""
    return """
    (A Unit of Vignash Group of Laboratories)

    Name: Mrs. LAKSHMI DEVI   Age: 52 Years
    Sex: Female
    Ref.By Dr: K. RAMAN

    Test                        Result      Reference Range
    ----------------------------------------------------------
    Fasting Blood Sugar
    112 mg/dl                               70 - 110
    BLOOD SUGAR(P.P): ↑ 182 mg/dl           upto 140
    HbA1c
    7.2 %
    Non diabetic : 4.0 to 6.0 %
    LDL Cholesterol: 130 mg/dl
    Total Cholesterol: 214 mg/dl            < 200
    """


@pytest.fixture
def simple_report_words():
    """OCR words supporting every value of simple_report_text"""
    return [
        {"text": "JOHN", "confidence": 95, "bbox": [10, 10, 60, 24]},
        {"text": "DOE", "confidence": 93, "bbox": [66, 10, 98, 24]},
        {"text": "45", "confidence": 90, "bbox": [80, 30, 96, 44]},
        {"text": "M", "confidence": 88, "bbox": [102, 30, 112, 44]},
        {"text": "98", "confidence": 97, "bbox": [170, 50, 186, 64]},
        {"text": "5.6%", "confidence": 92, "bbox": [140, 70, 170, 84]},
    ]


@pytest.fixture
def recognized_words(simple_report_words):
    """Same words as RecognizedWord objects"""
    return [RecognizedWord.from_dict(w) for w in simple_report_words]


@pytest.fixture
def simple_source(simple_report_text):
    """SourceText over the simple report"""
    return SourceText(simple_report_text)


@pytest.fixture
def orchestrator():
    """Orchestrator with default matchers and settings"""
    return ExtractionOrchestrator()
