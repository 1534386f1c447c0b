# ============================================================================
# src/lab_report_extraction/utils/__init__.py
# ============================================================================
"""
Utility modules for lab report extraction.

text_normalizer and ocr_input depend on core and are imported from their
own modules.
"""

from .exceptions import (
    LabExtractionError,
    SourceReadError,
    WordListError,
    OCRWordError,
)

from .logging import (
    setup_logging,
    get_logger,
    LogContext,
    log_performance,
)

from .parsing import (
    parse_numeric_value,
    collapse_whitespace,
    clean_trailing_punctuation,
)

__all__ = [
    # Exceptions
    'LabExtractionError',
    'SourceReadError',
    'WordListError',
    'OCRWordError',
    # Logging
    'setup_logging',
    'get_logger',
    'LogContext',
    'log_performance',
    # Parsing
    'parse_numeric_value',
    'collapse_whitespace',
    'clean_trailing_punctuation',
]
