# ============================================================================
# src/lab_report_extraction/core/context/extraction_result.py
# ============================================================================
"""
Extraction Result

Aggregate of the nine extracted fields for one report:
- One ExtractedField per canonical field name
- Per-field confidence map
- Low-confidence flags (fields a reviewer must look at)

Invariant: a field's value is non-empty iff its confidence is set. All writes
go through set_field/clear_field so the two never drift apart; flags are
derived from confidences rather than stored.
"""

import statistics
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ...constants import FIELD_NAMES, REPORT_JSON_KEYS
from ...config import threshold_settings
from ..confidence import ConfidenceThresholds
from .enums import ConfidenceLevel
from .extracted_field import ExtractedField


def _empty_fields() -> Dict[str, ExtractedField]:
    return {name: ExtractedField(name=name) for name in FIELD_NAMES}


@dataclass
class ExtractionResult:
    fields: Dict[str, ExtractedField] = field(default_factory=_empty_fields)
    low_confidence_threshold: float = field(
        default_factory=lambda: threshold_settings.LOW_CONFIDENCE_THRESHOLD
    )

    def __getattr__(self, name: str) -> Any:
        # Expose field values as attributes: result.hba1c_value
        fields = self.__dict__.get("fields")
        if fields is not None and name in fields:
            return fields[name].value
        raise AttributeError(f"{type(self).__name__!s} has no attribute {name!r}")

    # ------------------------------------------------------------------
    # Mutation (only during extraction)
    # ------------------------------------------------------------------

    def set_field(
        self,
        name: str,
        value: str,
        confidence: float,
        strategy: Optional[str] = None,
        position: Optional[int] = None,
    ) -> None:
        if name not in self.fields:
            raise KeyError(f"Unknown field: {name}")
        if not value or not value.strip():
            self.clear_field(name)
            return

        extracted = self.fields[name]
        extracted.value = value
        extracted.confidence = confidence
        if strategy is not None:
            extracted.strategy = strategy
        if position is not None:
            extracted.position = position

    def clear_field(self, name: str) -> None:
        self.fields[name] = ExtractedField(name=name)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_resolved(self, name: str) -> bool:
        return self.fields[name].is_resolved

    def get_field(self, name: str) -> ExtractedField:
        return self.fields[name]

    @property
    def resolved_fields(self) -> List[str]:
        return [name for name in FIELD_NAMES if self.fields[name].is_resolved]

    @property
    def missing_fields(self) -> List[str]:
        return [name for name in FIELD_NAMES if not self.fields[name].is_resolved]

    @property
    def confidence(self) -> Dict[str, float]:
        return {
            name: self.fields[name].confidence
            for name in FIELD_NAMES
            if self.fields[name].confidence is not None
        }

    @property
    def low_confidence_flags(self) -> List[str]:
        return [
            name for name, score in self.confidence.items()
            if 0 <= score < self.low_confidence_threshold
        ]

    @property
    def requires_review(self) -> bool:
        return bool(self.low_confidence_flags)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Nine field values plus confidence map and low-confidence flags."""
        data: Dict[str, Any] = {name: self.fields[name].value for name in FIELD_NAMES}
        data["confidence"] = self.confidence
        data["low_confidence_flags"] = self.low_confidence_flags
        return data

    def to_report_json(self) -> Dict[str, str]:
        """Field values under the report export keys."""
        return {
            key: self.fields[name].value
            for name, key in REPORT_JSON_KEYS.items()
        }

    def get_summary(self, thresholds: Optional[ConfidenceThresholds] = None) -> Dict[str, Any]:
        thresholds = thresholds or ConfidenceThresholds()
        scores = list(self.confidence.values())
        mean_confidence = round(statistics.mean(scores), 2) if scores else None
        level = thresholds.get_level(mean_confidence) if scores else ConfidenceLevel.NONE

        return {
            "resolved": len(self.resolved_fields),
            "missing": len(self.missing_fields),
            "missing_fields": self.missing_fields,
            "mean_confidence": mean_confidence,
            "confidence_level": level.value,
            "low_confidence_flags": self.low_confidence_flags,
            "requires_review": self.requires_review,
            "strategies": {
                name: self.fields[name].strategy
                for name in self.resolved_fields
            },
        }
