# src/lab_report_extraction/core/context/__init__.py

from .enums import ConfidenceLevel
from .recognized_word import RecognizedWord
from .source_text import SourceText, SourceLine
from .extracted_field import ExtractedField
from .extraction_result import ExtractionResult

__all__ = [
    "ConfidenceLevel",
    "RecognizedWord",
    "SourceText",
    "SourceLine",
    "ExtractedField",
    "ExtractionResult",
]
