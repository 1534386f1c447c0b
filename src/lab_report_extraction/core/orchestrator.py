# ============================================================================
# src/lab_report_extraction/core/orchestrator.py
# ============================================================================
"""
Extraction Orchestrator

This is the MAIN entry point for lab report extraction.

Flow:
1. Combine caption (optional) and OCR text
2. Split into trimmed, non-empty lines
3. Pass 1 (tabular): line by line, every unresolved matcher whose label
   appears on the line tries its line strategies
4. Pass 2 (narrative): every still-unresolved matcher tries its whole-text
   strategies
5. Normalize resolved fields
6. Return the ExtractionResult

A field is never re-matched once resolved, so within a field the first
accepted strategy wins. Extraction is a pure function of its inputs.
"""

from typing import Any, Iterable, List, Optional, Sequence
import logging

from ..config import ThresholdSettings, threshold_settings
from ..matchers import build_default_matchers
from ..matchers.base import Candidate, FieldMatcher
from ..utils.exceptions import OCRWordError
from ..utils.logging import log_performance
from ..utils.text_normalizer import ResultNormalizer
from .confidence import ConfidenceEstimator
from .context import ExtractionResult, RecognizedWord, SourceText

logger = logging.getLogger(__name__)


class ExtractionOrchestrator:
    """
    Runs the nine field matchers over one report.

    Stateless between calls: the matcher list and normalizer are built once
    and shared; every call gets a fresh SourceText, estimator and result.
    """

    def __init__(
        self,
        matchers: Optional[Sequence[FieldMatcher]] = None,
        normalizer: Optional[ResultNormalizer] = None,
        settings: Optional[ThresholdSettings] = None,
    ):
        self.settings = settings or threshold_settings
        self.matchers: List[FieldMatcher] = (
            list(matchers) if matchers is not None else build_default_matchers(self.settings)
        )
        self.normalizer = normalizer or ResultNormalizer(self.settings)

    # ========================================================================
    # MAIN PIPELINE
    # ========================================================================

    @log_performance(logger, "Lab report extraction", level=logging.DEBUG)
    def extract(
        self,
        ocr_text: str,
        ocr_words: Optional[Iterable[Any]] = None,
        caption_text: Optional[str] = None,
    ) -> ExtractionResult:
        """
        Extract the nine report fields.

        Args:
            ocr_text: Recognised document text
            ocr_words: RecognizedWord objects or {"text", "confidence", "bbox"} dicts
            caption_text: Optional free-text caption of the report image

        Returns:
            ExtractionResult; unresolved fields are empty, never an exception
        """
        result = self._new_result()

        if not isinstance(ocr_text, str):
            logger.warning(
                f"OCR text is {type(ocr_text).__name__}, not str; returning empty result"
            )
            return result

        if caption_text is not None and not isinstance(caption_text, str):
            logger.warning(f"Ignoring non-text caption of type {type(caption_text).__name__}")
            caption_text = None

        source = SourceText(ocr_text, caption_text)
        if source.is_empty:
            logger.info("No usable text; returning empty result")
            return result

        words = self._coerce_words(ocr_words)
        estimator = ConfidenceEstimator(source, words, self.settings)

        self._tabular_pass(source, result, estimator)
        self._narrative_pass(source, result, estimator)

        self.normalizer.normalize(result, source, estimator)

        logger.info(
            f"Extracted {len(result.resolved_fields)}/{len(result.fields)} fields "
            f"({len(source.lines)} lines, {len(words)} OCR words); "
            f"low confidence: {result.low_confidence_flags or 'none'}"
        )
        return result

    # ========================================================================
    # PASSES
    # ========================================================================

    def _tabular_pass(
        self,
        source: SourceText,
        result: ExtractionResult,
        estimator: ConfidenceEstimator,
    ) -> None:
        for index in range(len(source.lines)):
            for matcher in self.matchers:
                if result.is_resolved(matcher.field_name):
                    continue
                candidate = matcher.match_line(source, index)
                if candidate:
                    self._accept(result, matcher.field_name, candidate, estimator)

    def _narrative_pass(
        self,
        source: SourceText,
        result: ExtractionResult,
        estimator: ConfidenceEstimator,
    ) -> None:
        for matcher in self.matchers:
            if result.is_resolved(matcher.field_name):
                continue
            candidate = matcher.match_text(source)
            if candidate:
                self._accept(result, matcher.field_name, candidate, estimator)

    def _accept(
        self,
        result: ExtractionResult,
        field_name: str,
        candidate: Candidate,
        estimator: ConfidenceEstimator,
    ) -> None:
        result.set_field(
            field_name,
            candidate.value,
            estimator.estimate(candidate.evidence, candidate.position),
            strategy=candidate.strategy,
            position=candidate.position,
        )

        # Values captured alongside this one (gender from "Age/Sex: 45/M")
        for companion_field, companion in candidate.companions.items():
            if result.is_resolved(companion_field) or not companion.value:
                continue
            result.set_field(
                companion_field,
                companion.value,
                estimator.estimate(companion.evidence, companion.position),
                strategy=f"{candidate.strategy}:companion",
                position=companion.position,
            )

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _new_result(self) -> ExtractionResult:
        return ExtractionResult(low_confidence_threshold=self.settings.LOW_CONFIDENCE_THRESHOLD)

    @staticmethod
    def _coerce_words(ocr_words: Optional[Iterable[Any]]) -> List[RecognizedWord]:
        """Accept RecognizedWord objects or dicts; malformed entries are skipped."""
        if not ocr_words:
            return []

        words = []
        for i, item in enumerate(ocr_words):
            if isinstance(item, RecognizedWord):
                words.append(item)
                continue
            try:
                words.append(RecognizedWord.from_dict(item))
            except OCRWordError as e:
                logger.warning(f"Skipping OCR word #{i}: {e}")
        return words


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

_default_orchestrator: Optional[ExtractionOrchestrator] = None


def get_orchestrator() -> ExtractionOrchestrator:
    """Shared orchestrator built from default settings."""
    global _default_orchestrator
    if _default_orchestrator is None:
        _default_orchestrator = ExtractionOrchestrator()
    return _default_orchestrator


def extract(
    ocr_text: str,
    ocr_words: Optional[Iterable[Any]] = None,
    caption_text: Optional[str] = None,
) -> ExtractionResult:
    """
    Extract lab report fields with the default matchers.

    Example:
        result = extract("Patient Name: Mr JOHN DOE\\nAge/Sex: 45/M\\n", [])
        result.patient_name  # "JOHN DOE"
    """
    return get_orchestrator().extract(ocr_text, ocr_words, caption_text)
