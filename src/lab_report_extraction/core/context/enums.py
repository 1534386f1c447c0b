# ============================================================================
# src/lab_report_extraction/core/context/enums.py
# ============================================================================
"""
Extraction Enums
- Confidence levels
"""

from enum import Enum

class ConfidenceLevel(str, Enum):
    HIGH = "high"       # >= 85
    MEDIUM = "medium"   # 60 - 85
    LOW = "low"         # < 60
    NONE = "none"       # nothing resolved
