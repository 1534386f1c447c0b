# ============================================================================
# src/lab_report_extraction/core/context/extracted_field.py
# ============================================================================
"""
Single extracted field representation
- Value as shown on the report (empty if unresolved)
- Confidence 0-100 (None if unresolved)
- Provenance: winning strategy and offset in the source text
"""

from dataclasses import dataclass
from typing import Optional

@dataclass
class ExtractedField:
    name: str
    value: str = ""
    confidence: Optional[float] = None

    # Provenance
    strategy: Optional[str] = None
    position: Optional[int] = None

    @property
    def is_resolved(self) -> bool:
        return bool(self.value)
