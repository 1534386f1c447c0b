# ============================================================================
# src/lab_report_extraction/__init__.py
# ============================================================================
"""
Lab report field extraction.

Turns OCR text, per-word OCR confidences and an optional image caption into
nine report fields with per-field confidence and low-confidence flags.

    from lab_report_extraction import extract

    result = extract(ocr_text, ocr_words, caption_text)
    result.to_dict()
"""

__version__ = "0.1.0"

from .constants import FIELD_NAMES
from .core.context import (
    RecognizedWord,
    SourceText,
    ExtractedField,
    ExtractionResult,
)
from .core.confidence import ConfidenceEstimator
from .core.orchestrator import ExtractionOrchestrator, extract

__all__ = [
    'extract',
    'ExtractionOrchestrator',
    'ConfidenceEstimator',
    'RecognizedWord',
    'SourceText',
    'ExtractedField',
    'ExtractionResult',
    'FIELD_NAMES',
    '__version__',
]
