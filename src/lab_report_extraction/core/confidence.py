# ============================================================================
# src/lab_report_extraction/core/confidence.py
# ============================================================================
"""
Confidence Scoring

Estimates how much the OCR engine itself believed in a matched value, using
the per-word confidences it reported:

1. No word confidences at all      -> neutral score
2. Words overlapping the candidate -> mean of their confidences
3. Words near the match position   -> mean of their confidences
4. Nothing supports the candidate  -> low "no evidence" score

Direct overlap always beats proximity. The two fallback constants are fixed
calibration values, not probabilities.
"""

from typing import Iterable, List, Optional
from dataclasses import dataclass
import re
import statistics

from ..config import ThresholdSettings, threshold_settings
from .context.enums import ConfidenceLevel
from .context.recognized_word import RecognizedWord
from .context.source_text import SourceText


@dataclass
class ConfidenceThresholds:
    """Confidence level thresholds (0-100 scale)"""
    high: float = 85.0
    medium: float = 60.0

    def get_level(self, score: float) -> ConfidenceLevel:
        """
        Get confidence level from score.

        Args:
            score: Confidence score (0-100)

        Returns:
            ConfidenceLevel
        """
        if score >= self.high:
            return ConfidenceLevel.HIGH
        elif score >= self.medium:
            return ConfidenceLevel.MEDIUM
        else:
            return ConfidenceLevel.LOW


def _first_position(word: str, text: str) -> int:
    # Offsets must index the original text; lower() can change its length
    match = re.search(re.escape(word), text, re.IGNORECASE)
    return match.start() if match else -1


class ConfidenceEstimator:
    """
    Scores candidate values against the OCR word list of one document.

    Word positions are looked up once per document (first case-insensitive
    occurrence in the source text), so repeated estimates are cheap.
    """

    def __init__(
        self,
        source: SourceText,
        words: Optional[Iterable[RecognizedWord]] = None,
        settings: Optional[ThresholdSettings] = None,
    ):
        self.settings = settings or threshold_settings
        # Blank tokens would "overlap" every candidate
        self.words: List[RecognizedWord] = [w for w in (words or []) if w.text.strip()]
        self._lowered = [w.text.strip().lower() for w in self.words]
        self._positions = [_first_position(w.text.strip(), source.text) for w in self.words]

    @property
    def has_words(self) -> bool:
        return bool(self.words)

    def estimate(self, candidate_text: str, position: int = -1) -> float:
        """
        Score a matched value.

        Args:
            candidate_text: Substring that was matched (usually the captured value)
            position: Offset of the match in the source text, -1 if unknown

        Returns:
            Confidence 0-100, rounded to two decimals
        """
        if not self.words:
            return self.settings.NEUTRAL_CONFIDENCE

        candidate = (candidate_text or "").strip().lower()
        if candidate:
            overlapping = [
                word.confidence
                for word, text in zip(self.words, self._lowered)
                if text in candidate or candidate in text
            ]
            if overlapping:
                return self._clamp(statistics.mean(overlapping))

        if position is not None and position >= 0:
            window = self.settings.PROXIMITY_WINDOW
            nearby = [
                word.confidence
                for word, word_pos in zip(self.words, self._positions)
                if word_pos >= 0 and abs(word_pos - position) < window
            ]
            if nearby:
                return self._clamp(statistics.mean(nearby))

        return self.settings.NO_EVIDENCE_CONFIDENCE

    @staticmethod
    def _clamp(score: float) -> float:
        return round(max(0.0, min(100.0, float(score))), 2)


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def estimate_confidence(
    candidate_text: str,
    position: int,
    words: Iterable[RecognizedWord],
    source: SourceText,
) -> float:
    """
    One-off confidence estimate.

    Returns:
        Confidence 0-100
    """
    return ConfidenceEstimator(source, words).estimate(candidate_text, position)
