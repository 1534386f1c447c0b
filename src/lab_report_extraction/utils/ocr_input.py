# ============================================================================
# src/lab_report_extraction/utils/ocr_input.py
# ============================================================================
"""
OCR Input Adapters

Turn what the OCR engine and captioning model hand over into extractor input:
- Text files (single page or pages already concatenated)
- Word lists as JSON: a list of {"text", "confidence", "bbox"} objects, or the
  dict-of-lists that Tesseract's image_to_data(..., output_type=DICT) returns
- Multi-page text joined with page-break markers
- Per-page captions joined into one caption
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..core.context import RecognizedWord
from .exceptions import OCRWordError, SourceReadError, WordListError

logger = logging.getLogger(__name__)

TESSERACT_KEYS = ("text", "conf", "left", "top", "width", "height")


def read_source_text(path: Union[str, Path]) -> str:
    """
    Read OCR text (or a caption) from disk.

    Raises:
        SourceReadError: file missing or not decodable
    """
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(f"Cannot read {path}: {e}") from e


def load_words(path: Union[str, Path]) -> List[RecognizedWord]:
    """
    Load an OCR word list from a JSON file.

    Raises:
        WordListError: unreadable file, invalid JSON, or unknown layout
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise WordListError(f"Cannot read word list {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise WordListError(f"Word list {path} is not valid JSON: {e}") from e

    return parse_words(data)


def parse_words(data: Any) -> List[RecognizedWord]:
    """
    Convert decoded JSON into RecognizedWord objects.

    Malformed entries in a word list are skipped with a warning; a payload
    that is neither a list nor a Tesseract dict is an error.
    """
    if isinstance(data, dict) and all(key in data for key in TESSERACT_KEYS):
        return words_from_tesseract_data(data)

    if isinstance(data, dict) and isinstance(data.get("words"), list):
        data = data["words"]

    if not isinstance(data, list):
        raise WordListError(
            f"Expected a list of words or Tesseract data, got {type(data).__name__}"
        )

    words = []
    for i, item in enumerate(data):
        try:
            words.append(RecognizedWord.from_dict(item))
        except OCRWordError as e:
            logger.warning(f"Skipping word #{i}: {e}")
    return words


def words_from_tesseract_data(data: Dict[str, Sequence[Any]]) -> List[RecognizedWord]:
    """
    Convert Tesseract image_to_data output to words.

    Keeps entries with a positive confidence and non-blank text; layout rows
    (blocks, paragraphs, lines) carry conf -1 and are dropped. Confidence
    stays on Tesseract's 0-100 scale.
    """
    words = []

    for i, raw_conf in enumerate(data["conf"]):
        try:
            conf = float(raw_conf)
        except (TypeError, ValueError):
            continue

        if conf > 0:
            text = str(data["text"][i]).strip()
            if text:
                x0 = data["left"][i]
                y0 = data["top"][i]
                x1 = x0 + data["width"][i]
                y1 = y0 + data["height"][i]
                words.append(RecognizedWord(
                    text=text,
                    confidence=conf,
                    bbox=(x0, y0, x1, y1),
                ))

    return words


def combine_page_texts(pages: Sequence[str]) -> str:
    """Join per-page OCR text with '--- Page N ---' markers (1-based)."""
    combined = ""
    for number, text in enumerate(pages, start=1):
        combined += f"\n--- Page {number} ---\n{text}\n"
    return combined


def combine_captions(captions: Sequence[Optional[str]]) -> str:
    """Join per-page captions as 'Page N: caption', skipping blank ones."""
    parts = [
        f"Page {number}: {caption.strip()}"
        for number, caption in enumerate(captions, start=1)
        if caption and caption.strip()
    ]
    return "\n".join(parts)
