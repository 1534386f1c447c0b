# ============================================================================
# src/lab_report_extraction/utils/text_normalizer.py
# ============================================================================
"""
Result Normalization

Cleans up resolved fields after both extraction passes:
- Collapses internal whitespace
- Re-checks names against stoplists and bare section headers
- Repairs lab names (group canonical name, OCR typos, suffixes printed
  on the lines after the letterhead)
- Re-checks a minor's age against the "Age/Sex" layout

Clearing a field always goes through ExtractionResult.clear_field so value,
confidence and flag disappear together.
"""

import re
import logging
from typing import Optional

from ..config import ThresholdSettings, threshold_settings
from ..constants import (
    FIELD_NAMES,
    TEXT_FIELDS,
    AGE,
    LAB_NAME,
    DOCTOR_NAME,
    SELF_REFERRAL,
    PLAUSIBILITY_RANGES,
)
from ..core.confidence import ConfidenceEstimator
from ..core.context import ExtractionResult, SourceText
from ..validators import PlausibilityChecker, find_excluded_word, is_section_header
from .parsing import collapse_whitespace, parse_numeric_value

logger = logging.getLogger(__name__)

VIGNASH_GROUP = re.compile(r"vignash\s+group", re.IGNORECASE)
LABORATOR = re.compile(r"laborator", re.IGNORECASE)
VIGNASH_CANONICAL = "A Unit of Vignash Group of Laboratories"

# OCR misreads seen in vendor letterheads: pattern -> replacement
LAB_NAME_TYPOS = {
    re.compile(r"superspeciafity", re.IGNORECASE): "Superspeciality",
}

RENAL_VASCULAR_CENTRE = re.compile(r"\brenal\s+and\s+vascular\s+cent(?:re|er)\b", re.IGNORECASE)
HAS_RENAL_VASCULAR = re.compile(r"renal|vascular", re.IGNORECASE)
HOSPITALS = re.compile(r"\bhospitals\b", re.IGNORECASE)
HAS_HOSPITAL = re.compile(r"\bhospitals?\b", re.IGNORECASE)
RENAL_WINDOW = 150
HOSPITALS_WINDOW = 100

AGE_RECHECK = re.compile(
    r"\bage(?:\s*/\s*sex)?[\s:]*(\d{2,3})(?!\d)\s*[/\s]*[MF]\b",
    re.IGNORECASE,
)


class ResultNormalizer:
    """Post-processing for an ExtractionResult; mutates and returns it."""

    def __init__(self, settings: Optional[ThresholdSettings] = None):
        self.settings = settings or threshold_settings
        self.checker = PlausibilityChecker()

    def normalize(
        self,
        result: ExtractionResult,
        source: SourceText,
        estimator: ConfidenceEstimator,
    ) -> ExtractionResult:
        self._collapse_whitespace(result)
        self._recheck_stoplists(result)
        self._repair_lab_name(result, source)
        self._recheck_age(result, source, estimator)
        return result

    def _collapse_whitespace(self, result: ExtractionResult) -> None:
        for name in FIELD_NAMES:
            extracted = result.get_field(name)
            if not extracted.is_resolved:
                continue
            cleaned = collapse_whitespace(extracted.value)
            if not cleaned:
                result.clear_field(name)
            elif cleaned != extracted.value:
                extracted.value = cleaned

    def _recheck_stoplists(self, result: ExtractionResult) -> None:
        for name in TEXT_FIELDS:
            value = result.get_field(name).value
            if not value:
                continue
            if name == DOCTOR_NAME and value == SELF_REFERRAL:
                continue

            excluded = find_excluded_word(name, value)
            if excluded or is_section_header(name, value):
                logger.info(f"Clearing {name} '{value}': not a {name.replace('_', ' ')}")
                result.clear_field(name)

    def _repair_lab_name(self, result: ExtractionResult, source: SourceText) -> None:
        extracted = result.get_field(LAB_NAME)
        if not extracted.is_resolved:
            return

        lab_name = extracted.value

        if VIGNASH_GROUP.search(lab_name) and not LABORATOR.search(lab_name):
            lab_name = VIGNASH_CANONICAL

        for pattern, replacement in LAB_NAME_TYPOS.items():
            lab_name = pattern.sub(replacement, lab_name)

        if extracted.position is not None and extracted.position >= 0:
            lab_name = self._append_suffixes(lab_name, source.text, extracted.position)

        ok, reason = self.checker.check_length(LAB_NAME, lab_name)
        if not ok:
            logger.info(f"Clearing lab_name '{lab_name}': {reason}")
            result.clear_field(LAB_NAME)
            return

        if lab_name != extracted.value:
            logger.debug(f"Lab name repaired: '{extracted.value}' -> '{lab_name}'")
            extracted.value = lab_name

    @staticmethod
    def _append_suffixes(lab_name: str, text: str, position: int) -> str:
        """Pull 'HOSPITALS' / 'RENAL AND VASCULAR CENTRE' from the lines after the letterhead."""
        if not HAS_HOSPITAL.search(lab_name):
            match = HOSPITALS.search(text[position:position + HOSPITALS_WINDOW])
            if match:
                lab_name = f"{lab_name} {match.group(0)}"

        if not HAS_RENAL_VASCULAR.search(lab_name):
            match = RENAL_VASCULAR_CENTRE.search(text[position:position + RENAL_WINDOW])
            if match:
                lab_name = f"{lab_name} {collapse_whitespace(match.group(0))}"

        return lab_name

    def _recheck_age(
        self,
        result: ExtractionResult,
        source: SourceText,
        estimator: ConfidenceEstimator,
    ) -> None:
        age = parse_numeric_value(result.get_field(AGE).value)
        min_age = PLAUSIBILITY_RANGES[AGE][0]
        if age is None or age >= min_age:
            return

        for match in AGE_RECHECK.finditer(source.text):
            ok, _ = self.checker.check_raw(AGE, match.group(1))
            if ok:
                value = match.group(1)
                position = match.start(1)
                logger.info(f"Age {age:g} replaced by adult age {value} from age/sex layout")
                result.set_field(
                    AGE,
                    value,
                    estimator.estimate(value, position),
                    strategy="age_recheck",
                    position=position,
                )
                return

        logger.info(f"Clearing age {age:g}: no adult age found")
        result.clear_field(AGE)
