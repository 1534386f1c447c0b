# ============================================================================
# src/lab_report_extraction/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for lab report extraction.

Extraction itself never raises for missing or unmatched fields; these are
raised by the input adapters when collaborator output cannot be read.
"""


class LabExtractionError(Exception):
    """Base exception for all lab report extraction errors."""
    pass


class SourceReadError(LabExtractionError):
    """OCR text or caption could not be read."""
    pass


class WordListError(LabExtractionError):
    """OCR word list is unreadable or has an unknown layout."""
    pass


class OCRWordError(WordListError):
    """A single OCR word entry is malformed."""
    pass
