# ============================================================================
# src/lab_report_extraction/core/__init__.py
# ============================================================================
"""
Core components for lab report extraction.

The orchestrator lives in core.orchestrator and is imported from the package
root; it depends on the matchers, which depend on this package.
"""

from .context import (
    ConfidenceLevel,
    RecognizedWord,
    SourceText,
    SourceLine,
    ExtractedField,
    ExtractionResult,
)
from .confidence import ConfidenceEstimator, ConfidenceThresholds, estimate_confidence

__all__ = [
    'ConfidenceLevel',
    'RecognizedWord',
    'SourceText',
    'SourceLine',
    'ExtractedField',
    'ExtractionResult',
    'ConfidenceEstimator',
    'ConfidenceThresholds',
    'estimate_confidence',
]
