# ============================================================================
# src/lab_report_extraction/config/thresholds_config.py
# ============================================================================
"""
Confidence & Scan Thresholds
- Low-confidence flagging
- Confidence calibration constants
- Proximity / range-context windows
- Line lookahead for tabular layouts
"""

from pydantic import Field
from pydantic_settings import BaseSettings

class ThresholdSettings(BaseSettings):
    LOW_CONFIDENCE_THRESHOLD: float = Field(
        default=60.0,
        ge=0.0, le=100.0,
        description="Fields with confidence below this are flagged for human review"
    )
    NEUTRAL_CONFIDENCE: float = Field(
        default=50.0,
        ge=0.0, le=100.0,
        description="Score used when the OCR engine supplied no word confidences at all"
    )
    NO_EVIDENCE_CONFIDENCE: float = Field(
        default=30.0,
        ge=0.0, le=100.0,
        description="Score used when no OCR word supports the matched value"
    )
    PROXIMITY_WINDOW: int = Field(
        default=50,
        ge=0,
        description="Characters around a match in which OCR words count as nearby evidence"
    )
    RANGE_CONTEXT_WINDOW: int = Field(
        default=50,
        ge=0,
        description="Characters around an HbA1c value inspected for reference-range wording"
    )
    LINE_LOOKAHEAD: int = Field(
        default=2,
        ge=1,
        description="Lines below a bare label scanned for its value during the tabular pass"
    )
    TABLE_LOOKAHEAD: int = Field(
        default=3,
        ge=1,
        description="Lines below a test name scanned for its result during the narrative table scan"
    )
    HEADER_SCAN_LINES: int = Field(
        default=20,
        ge=1,
        description="Leading lines searched for a bare patient name"
    )
    DOCTOR_SCAN_LINES: int = Field(
        default=30,
        ge=1,
        description="Leading lines searched for a 'Doctor:' label with the name on the next line"
    )

threshold_settings = ThresholdSettings()
