# ============================================================================
# src/lab_report_extraction/config/__init__.py
# ============================================================================
"""
Convenient imports for all settings
"""

from .thresholds_config import ThresholdSettings, threshold_settings
from .logging_config import LoggingSettings, logging_settings
