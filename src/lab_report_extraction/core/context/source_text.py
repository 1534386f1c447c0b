# ============================================================================
# src/lab_report_extraction/core/context/source_text.py
# ============================================================================
"""
Source text for one extraction run
- Optional caption prepended to the OCR text
- Trimmed, non-empty lines with their offsets in the combined text
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class SourceLine:
    text: str
    offset: int  # position of the first non-blank character in SourceText.text
    index: int


class SourceText:
    """
    Read-only view of the document being extracted.

    The caption is a weak hint from a captioning model; it is placed before
    the OCR text so that header-style cues in it are seen first.
    """

    def __init__(self, ocr_text: str, caption_text: Optional[str] = None):
        self.ocr_text = ocr_text or ""
        self.caption_text = caption_text if caption_text and caption_text.strip() else None

        if self.caption_text:
            self.text = f"{self.caption_text}\n{self.ocr_text}"
        else:
            self.text = self.ocr_text

        self.lines = self._split_lines(self.text)

    @staticmethod
    def _split_lines(text: str) -> List[SourceLine]:
        lines = []
        offset = 0
        for raw in text.split("\n"):
            stripped = raw.strip()
            if stripped:
                leading = len(raw) - len(raw.lstrip())
                lines.append(SourceLine(stripped, offset + leading, len(lines)))
            offset += len(raw) + 1
        return lines

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def head(self, count: int) -> List[SourceLine]:
        """First `count` lines."""
        return self.lines[:count]

    def following(self, index: int, count: int) -> List[SourceLine]:
        """Up to `count` lines after line `index`."""
        return self.lines[index + 1:index + 1 + count]

    def line_at(self, position: int) -> Optional[SourceLine]:
        """Line containing the character at `position`, if any."""
        for line in self.lines:
            if line.offset <= position < line.offset + len(line.text):
                return line
        return None

    def __len__(self) -> int:
        return len(self.text)
