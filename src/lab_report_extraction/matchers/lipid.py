# ============================================================================
# src/lab_report_extraction/matchers/lipid.py
# ============================================================================
"""
Total Cholesterol Matcher

Labels seen in the wild: "Total Cholesterol", "Total Cholestral",
"SERUM CHOLESTROL", "Cholesterol, Total", "CHOL".

Lipid profiles also list HDL / LDL / VLDL cholesterol; a cholesterol label
directly preceded by one of those is a fraction, not the total, and is skipped.
"""

import re
from functools import partial
from typing import Iterator, List

from ..config import ThresholdSettings
from ..constants import TOTAL_CHOLESTEROL
from ..core.context import SourceText
from ..validators import PlausibilityChecker
from .base import (
    NUMBER,
    Candidate,
    FieldMatcher,
    LineStrategy,
    TextStrategy,
    is_label_only,
    iter_matches,
    numeric_validator,
    values_below,
)

_checker = PlausibilityChecker()

CHOLESTEROL_WORD = r"(?:cholest(?:erol|rol|ral)|\bchol\b)"
CHOLESTEROL_LABEL = r"(?:(?:total|serum)\s+)?" + CHOLESTEROL_WORD + r"(?:\s*,?\s*total)?"
UNIT_REQUIRED = r"(?:mgs?\s*/?\s*dl|mg\s*%)"
NOT_RANGE_START = r"(?!\s*[-–]\s*\d)"
FRACTION_PREFIX = re.compile(r"\b(?:hdl|ldl|vldl|non[\s-]*hdl)\b[\s\-]*$", re.IGNORECASE)
FRACTION_LOOKBACK = 12

CHOLESTEROL_CUE = re.compile(r"cholest|\bchol\b", re.IGNORECASE)
CHOLESTEROL_INLINE = re.compile(CHOLESTEROL_LABEL + r"[\s:]+" + NUMBER + NOT_RANGE_START, re.IGNORECASE)
CHOLESTEROL_LOOSE = re.compile(
    CHOLESTEROL_LABEL + r"[^\d\n]*?" + NUMBER + NOT_RANGE_START,
    re.IGNORECASE,
)
BARE_CHOLESTEROL_VALUE = re.compile(r"^" + NUMBER + r"\s*(?:mgs?\s*/\s*dl|mg\s*%|mgs?)?$", re.IGNORECASE)
VALUE_WITH_UNIT = re.compile(NUMBER + r"\s*(?:mgs?\s*/\s*dl|mg\s*%|mgs?)", re.IGNORECASE)

SERUM_CHOLESTEROL = re.compile(
    r"serum\s+cholest(?:e)?rol[\s:]+" + NUMBER + r"\s*(?:" + UNIT_REQUIRED + r"|mg)",
    re.IGNORECASE,
)
CHOLESTEROL_WITH_UNIT = re.compile(
    r"(?:total\s+cholest(?:erol|ral)|cholesterol|\bchol\b)[\s:]+" + NUMBER + r"\s*" + UNIT_REQUIRED,
    re.IGNORECASE,
)
CHOLESTEROL_MG = re.compile(
    r"(?:\bchol\b|cholesterol|cholestrol)[\s:]+" + NUMBER + r"\s*mgs?",
    re.IGNORECASE,
)
CHOLESTEROL_TABLE_ROW = re.compile(
    r"(?:total\s+cholest(?:erol|ral)|serum\s+cholest(?:e)?rol)[^\d]*" + NUMBER + r"\s*mgs?",
    re.IGNORECASE,
)
CHOLESTEROL_LINE_SCAN = re.compile(
    r"(?:total\s+cholest(?:erol|ral)|serum\s+cholest(?:e)?rol|cholesterol|\bchol\b)[\s:]+"
    + NUMBER + NOT_RANGE_START,
    re.IGNORECASE,
)


def is_fraction_label(text: str, label_start: int) -> bool:
    """True if the label is preceded by HDL/LDL/VLDL (a fraction, not the total)."""
    before = text[max(0, label_start - FRACTION_LOOKBACK):label_start]
    return FRACTION_PREFIX.search(before) is not None


def total_matches(pattern, text: str, offset: int = 0) -> Iterator[Candidate]:
    for match in pattern.finditer(text):
        if is_fraction_label(text, match.start()):
            continue
        yield Candidate(value=match.group(1), position=offset + match.start(1))


def _line_strategy(pattern):
    def strategy(source: SourceText, index: int) -> Iterator[Candidate]:
        line = source.lines[index]
        yield from total_matches(pattern, line.text, line.offset)
    return strategy


def _text_strategy(pattern):
    def strategy(source: SourceText) -> Iterator[Candidate]:
        yield from total_matches(pattern, source.text)
    return strategy


def cholesterol_next_line(source: SourceText, index: int, lookahead: int) -> Iterator[Candidate]:
    line = source.lines[index]
    if not is_label_only(line.text):
        return
    label = CHOLESTEROL_CUE.search(line.text)
    if label is None or is_fraction_label(line.text, label.start()):
        return
    yield from values_below(source, index, BARE_CHOLESTEROL_VALUE, lookahead)


def cholesterol_line_scan(source: SourceText) -> Iterator[Candidate]:
    """Cholesterol rows: value right after the label, else a value with units on the row."""
    for line in source.lines:
        if not (CHOLESTEROL_CUE.search(line.text) or "serum" in line.text.lower()):
            continue
        yield from total_matches(CHOLESTEROL_LINE_SCAN, line.text, line.offset)

        label = CHOLESTEROL_CUE.search(line.text)
        if label and not is_fraction_label(line.text, label.start()):
            yield from iter_matches(VALUE_WITH_UNIT, line.text, offset=line.offset)


def build_lipid_matchers(settings: ThresholdSettings) -> List[FieldMatcher]:
    return [
        FieldMatcher(
            TOTAL_CHOLESTEROL,
            cue=CHOLESTEROL_CUE,
            line_strategies=[
                LineStrategy("cholesterol_inline", _line_strategy(CHOLESTEROL_INLINE)),
                LineStrategy("cholesterol_loose", _line_strategy(CHOLESTEROL_LOOSE)),
                LineStrategy(
                    "cholesterol_next_line",
                    partial(cholesterol_next_line, lookahead=settings.LINE_LOOKAHEAD),
                ),
            ],
            text_strategies=[
                TextStrategy("serum_cholesterol", _text_strategy(SERUM_CHOLESTEROL)),
                TextStrategy("cholesterol_with_unit", _text_strategy(CHOLESTEROL_WITH_UNIT)),
                TextStrategy("cholesterol_mg", _text_strategy(CHOLESTEROL_MG)),
                TextStrategy("cholesterol_table_row", _text_strategy(CHOLESTEROL_TABLE_ROW)),
                TextStrategy("cholesterol_line_scan", cholesterol_line_scan),
            ],
            validator=numeric_validator(_checker, TOTAL_CHOLESTEROL),
        )
    ]
