# ============================================================================
# src/lab_report_extraction/core/context/recognized_word.py
# ============================================================================
"""
Single OCR word
- Text token as recognised by the OCR engine
- Per-word confidence (0-100)
- Optional bounding box (x0, y0, x1, y1) in image pixels
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ...utils.exceptions import OCRWordError

BBox = Tuple[float, float, float, float]


@dataclass(frozen=True)
class RecognizedWord:
    text: str
    confidence: float
    bbox: Optional[BBox] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecognizedWord":
        """
        Build a word from an OCR engine payload.

        Accepts {"text", "confidence" | "conf", "bbox"} where bbox is either a
        4-sequence or a {"x0", "y0", "x1", "y1"} mapping.

        Raises:
            OCRWordError: entry has no text or a non-numeric confidence
        """
        if not isinstance(data, dict):
            raise OCRWordError(f"Expected a mapping for OCR word, got {type(data).__name__}")

        text = data.get("text")
        if not isinstance(text, str):
            raise OCRWordError(f"OCR word has no text: {data!r}")

        raw_confidence = data.get("confidence", data.get("conf", 0))
        try:
            confidence = float(raw_confidence if raw_confidence is not None else 0)
        except (TypeError, ValueError):
            raise OCRWordError(f"OCR word '{text}' has non-numeric confidence {raw_confidence!r}")

        return cls(text=text, confidence=confidence, bbox=_parse_bbox(data.get("bbox"), text))


def _parse_bbox(raw: Any, text: str) -> Optional[BBox]:
    if raw is None:
        return None

    try:
        if isinstance(raw, dict):
            return (
                float(raw["x0"]),
                float(raw["y0"]),
                float(raw["x1"]),
                float(raw["y1"]),
            )
        if len(raw) == 4:
            return tuple(float(v) for v in raw)
    except (KeyError, TypeError, ValueError):
        pass

    raise OCRWordError(f"OCR word '{text}' has malformed bbox {raw!r}")
