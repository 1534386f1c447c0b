# ============================================================================
# src/lab_report_extraction/matchers/glycemic.py
# ============================================================================
"""
Glycemic Panel Matchers
- Fasting blood sugar: "Fasting Blood Sugar", "FBS", "Bl.Sugar(F)"
- Post-prandial blood sugar: "Post Prandial", "PPBS", "Blood Sugar(P.P)"
- HbA1c: "HbA1c", "HBA1C (BIORAD)"

Result columns may carry an abnormal-flag arrow before the number
("BLOOD SUGAR(P.P): ↑ 182 mg/dl"). Reference ranges printed on the same
line ("70 - 110") are skipped by refusing numbers that start a dash range.

HbA1c candidates additionally pass the reference boundary filter, because
interpretation bands (4.0 / 6.0 / 8.0) are printed right next to the result.
"""

import re
from functools import partial
from typing import Iterator, List, Optional, Tuple

from ..config import ThresholdSettings
from ..constants import BLOOD_SUGAR_FASTING, BLOOD_SUGAR_PP, HBA1C_VALUE
from ..core.context import SourceText
from ..utils.parsing import parse_numeric_value
from ..validators import PlausibilityChecker, is_reference_boundary
from .base import (
    NUMBER,
    PERCENT_NUMBER,
    Candidate,
    FieldMatcher,
    LineStrategy,
    TextStrategy,
    is_label_only,
    line_matches,
    numeric_validator,
    text_matches,
    values_below,
)

_checker = PlausibilityChecker()

FLAG = r"(?:[↑↓*]\s*)?"
NOT_RANGE_START = r"(?!\s*[-–]\s*\d)"
UNIT_REQUIRED = r"(?:mgs?\s*/?\s*dl|mg\s*%)"
BARE_SUGAR_VALUE = re.compile(r"^" + NUMBER + r"\s*(?:mgs?\s*/\s*dl|mg\s*%|mgs?)?$", re.IGNORECASE)


def _text_strategy(pattern):
    def strategy(source: SourceText) -> Iterator[Candidate]:
        yield from text_matches(pattern, source)
    return strategy


def _values_under_label(source: SourceText, index: int, value_pattern, lookahead: int) -> Iterator[Candidate]:
    """Values on the lines below a label that carries no value itself."""
    if not is_label_only(source.lines[index].text):
        return
    yield from values_below(source, index, value_pattern, lookahead)


# ============================================================================
# FASTING BLOOD SUGAR
# ============================================================================

FASTING_LABEL = (
    r"(?:fasting\s+(?:blood\s+)?(?:sugar|glucose)"
    r"|\b(?:blood|bl|bi)\.?\s*sugar\s*\(?\s*f(?:asting)?\s*\)?"
    r"|\bfbs\b|\bfasting\b)"
)

FASTING_CUE = re.compile(
    r"\bfasting\b|\bfbs\b|\b(?:blood|bl|bi)\.?\s*sugar\s*\(\s*f(?:asting)?\s*\)",
    re.IGNORECASE,
)
FASTING_INLINE = re.compile(FASTING_LABEL + r"[\s:]+" + FLAG + NUMBER + NOT_RANGE_START, re.IGNORECASE)
FASTING_LOOSE = re.compile(FASTING_LABEL + r"[^\d\n]*?" + NUMBER + NOT_RANGE_START, re.IGNORECASE)

FASTING_WITH_UNIT = re.compile(
    r"(?:fasting\s+blood\s+sugar|blood\s+sugar\s*\(?\s*f(?:asting)?\s*\)?)[\s:]+"
    + NUMBER + r"\s*" + UNIT_REQUIRED,
    re.IGNORECASE,
)
FASTING_ABBREVIATED = re.compile(
    r"(?:\bfasting|\bf\b\.?|\bfbs\b)[\s:]+" + NUMBER + r"\s*" + UNIT_REQUIRED,
    re.IGNORECASE,
)
FASTING_TABLE_ROW = re.compile(r"fasting\s+blood\s+sugar[^\d]*" + NUMBER + r"\s*mgs?", re.IGNORECASE)
FASTING_BL_SUGAR = re.compile(r"\b(?:bl|bi)\.?\s*sugar\s*\(f\)[\s:]*" + NUMBER, re.IGNORECASE)
FASTING_NEAR_KEYWORD = re.compile(
    r"fasting[^\d]{0,20}" + NUMBER + r"\s*(?:mgs?|normal|value)",
    re.IGNORECASE,
)
FASTING_TEST_NAME = re.compile(
    r"blood\s+sugar\s*\(?\s*fasting\s*\)?[^\d]{0,50}" + NUMBER + NOT_RANGE_START,
    re.IGNORECASE,
)

FASTING_TEST_LINE = re.compile(
    r"blood\s+sugar.*(?:fasting|\(f\))|fasting.*blood|blood.*fasting",
    re.IGNORECASE,
)
SUGAR_WITH_UNIT = re.compile(NUMBER + r"\s*(?:mgs?\s*/\s*dl|mg\s*%|mgs?)", re.IGNORECASE)


def fasting_inline(source: SourceText, index: int) -> Iterator[Candidate]:
    yield from line_matches(FASTING_INLINE, source, index)


def fasting_loose(source: SourceText, index: int) -> Iterator[Candidate]:
    yield from line_matches(FASTING_LOOSE, source, index)


def fasting_table_scan(source: SourceText, lookahead: int) -> Iterator[Candidate]:
    """Test-name rows: a value with units on the row, else a bare value just below."""
    for line in source.lines:
        if not FASTING_TEST_LINE.search(line.text):
            continue
        yield from line_matches(SUGAR_WITH_UNIT, source, line.index)
        yield from values_below(source, line.index, BARE_SUGAR_VALUE, lookahead)


# ============================================================================
# POST-PRANDIAL BLOOD SUGAR
# ============================================================================

PP_LABEL = (
    r"(?:post\s*prandial(?:\s+blood\s+sugar)?"
    r"|post\s*meal(?:\s+blood\s+sugar)?"
    r"|\b(?:blood|bl|bi)\.?\s*sugar\s*\(?\s*(?:p\.?\s*p\.?|pp|post\s*prandial|post\s*meal)\s*\)?"
    r"|\bppbs\b|\bpp\b|\bp\.\s*p\b\.?)"
)

PP_CUE = re.compile(r"post\s*prandial|post\s*meal|\bppbs\b|\bpp\b|\bp\.\s*p\b", re.IGNORECASE)
PP_INLINE = re.compile(PP_LABEL + r"[\s:]+" + FLAG + NUMBER + NOT_RANGE_START, re.IGNORECASE)
PP_LOOSE = re.compile(PP_LABEL + r"[^\d\n]*?" + NUMBER + NOT_RANGE_START, re.IGNORECASE)

PP_BLOOD_SUGAR = re.compile(
    r"(?:blood\s+sugar\s*\(?\s*p\.?\s*p\.?\s*\)?|blood\s+sugar\s*\(?\s*pp\s*\)?)[\s:]+"
    + FLAG + NUMBER + r"\s*(?:" + UNIT_REQUIRED + r"|mg)",
    re.IGNORECASE,
)
PP_SPELLED_OUT = re.compile(
    r"(?:post\s+prandial\s+blood\s+sugar|post\s+meal\s+blood\s+sugar"
    r"|blood\s+sugar\s*\(?\s*(?:pp|post\s+prandial|post\s+meal)\s*\)?)[\s:]+"
    + FLAG + NUMBER + r"\s*" + UNIT_REQUIRED,
    re.IGNORECASE,
)
PP_ABBREVIATED = re.compile(
    r"(?:\bppbs|\bpp|post\s+prandial|post\s+meal|\bp\.?p\b\.?)[\s:]+"
    + FLAG + NUMBER + r"\s*" + UNIT_REQUIRED,
    re.IGNORECASE,
)
PP_TABLE_ROW = re.compile(
    r"(?:post\s+prandial\s+blood\s+sugar|post\s+meal\s+blood\s+sugar|\bppbs\b|\bpp\b"
    r"|blood\s+sugar\s*\(?\s*p\.?\s*p\.?\s*\)?)[^\d]*" + NUMBER + r"\s*mgs?",
    re.IGNORECASE,
)
PP_BL_SUGAR = re.compile(r"\b(?:bl|bi)\.?\s*sugar\s*\(pp\)[\s:]*" + FLAG + NUMBER, re.IGNORECASE)
PP_NEAR_KEYWORD = re.compile(
    r"(?:\bpp\b|\bppbs\b|post\s+prandial|post\s+meal|blood\s+sugar\s*\(?\s*p\.?\s*p\.?\s*\)?)"
    r"[^\d]{0,20}" + NUMBER + r"\s*(?:mgs?|normal|value|upto)",
    re.IGNORECASE,
)


def pp_inline(source: SourceText, index: int) -> Iterator[Candidate]:
    yield from line_matches(PP_INLINE, source, index)


def pp_loose(source: SourceText, index: int) -> Iterator[Candidate]:
    yield from line_matches(PP_LOOSE, source, index)


# ============================================================================
# HbA1c
# ============================================================================

# Optional method in brackets: "HBA1C (BIORAD)", "HbA1c (HPLC)"
HBA1C_LABEL = r"\bhb\s*a\s*1\s*c\b(?:\s*\(\s*[a-z][a-z\- ]{1,20}\))?"

HBA1C_CUE = re.compile(r"\bhb\s*a\s*1\s*c\b", re.IGNORECASE)
HBA1C_INLINE = re.compile(HBA1C_LABEL + r"[\s:]*" + PERCENT_NUMBER + r"\s*%", re.IGNORECASE)
HBA1C_LOOSE = re.compile(HBA1C_LABEL + r"[^\d\n]*?" + PERCENT_NUMBER + r"\s*%", re.IGNORECASE)
BARE_PERCENT_VALUE = re.compile(r"^" + PERCENT_NUMBER + r"\s*%$")
PERCENT_IN_LINE = re.compile(PERCENT_NUMBER + r"\s*%")

HBA1C_LABELLED = re.compile(HBA1C_LABEL + r"[\s:]+" + PERCENT_NUMBER + r"\s*%", re.IGNORECASE)
HBA1C_ANYWHERE_AFTER = re.compile(r"\bhb\s*a\s*1\s*c[^\d]*" + PERCENT_NUMBER + r"\s*%", re.IGNORECASE)


def make_hba1c_validator(window: int):
    def validate(candidate: Candidate, source: SourceText) -> Tuple[bool, Optional[str]]:
        value = parse_numeric_value(candidate.value)
        if value is None:
            return False, f"Not a number: {candidate.value!r}"

        ok, reason = _checker.check(HBA1C_VALUE, value)
        if not ok:
            return False, reason

        if is_reference_boundary(value, source.text, candidate.position, window):
            return False, f"{value} is a reference range boundary"

        return True, None
    return validate


def hba1c_inline(source: SourceText, index: int) -> Iterator[Candidate]:
    yield from line_matches(HBA1C_INLINE, source, index)


def hba1c_loose(source: SourceText, index: int) -> Iterator[Candidate]:
    yield from line_matches(HBA1C_LOOSE, source, index)


def hba1c_table_scan(source: SourceText, lookahead: int) -> Iterator[Candidate]:
    """HbA1c test-name rows: any percentage on the row, else a bare percentage below."""
    for line in source.lines:
        if not HBA1C_CUE.search(line.text):
            continue
        yield from line_matches(PERCENT_IN_LINE, source, line.index)
        yield from values_below(source, line.index, BARE_PERCENT_VALUE, lookahead)


# ============================================================================
# FACTORY
# ============================================================================

def build_glycemic_matchers(settings: ThresholdSettings) -> List[FieldMatcher]:
    below_label = partial(_values_under_label, lookahead=settings.LINE_LOOKAHEAD)

    fasting = FieldMatcher(
        BLOOD_SUGAR_FASTING,
        cue=FASTING_CUE,
        line_strategies=[
            LineStrategy("fasting_inline", fasting_inline),
            LineStrategy("fasting_loose", fasting_loose),
            LineStrategy("fasting_next_line", partial(below_label, value_pattern=BARE_SUGAR_VALUE)),
        ],
        text_strategies=[
            TextStrategy("fasting_with_unit", _text_strategy(FASTING_WITH_UNIT)),
            TextStrategy("fasting_abbreviated", _text_strategy(FASTING_ABBREVIATED)),
            TextStrategy("fasting_table_row", _text_strategy(FASTING_TABLE_ROW)),
            TextStrategy("fasting_bl_sugar", _text_strategy(FASTING_BL_SUGAR)),
            TextStrategy("fasting_near_keyword", _text_strategy(FASTING_NEAR_KEYWORD)),
            TextStrategy("fasting_test_name", _text_strategy(FASTING_TEST_NAME)),
            TextStrategy(
                "fasting_table_scan",
                partial(fasting_table_scan, lookahead=settings.TABLE_LOOKAHEAD),
            ),
        ],
        validator=numeric_validator(_checker, BLOOD_SUGAR_FASTING),
    )

    post_prandial = FieldMatcher(
        BLOOD_SUGAR_PP,
        cue=PP_CUE,
        line_strategies=[
            LineStrategy("pp_inline", pp_inline),
            LineStrategy("pp_loose", pp_loose),
            LineStrategy("pp_next_line", partial(below_label, value_pattern=BARE_SUGAR_VALUE)),
        ],
        text_strategies=[
            TextStrategy("pp_blood_sugar", _text_strategy(PP_BLOOD_SUGAR)),
            TextStrategy("pp_spelled_out", _text_strategy(PP_SPELLED_OUT)),
            TextStrategy("pp_abbreviated", _text_strategy(PP_ABBREVIATED)),
            TextStrategy("pp_table_row", _text_strategy(PP_TABLE_ROW)),
            TextStrategy("pp_bl_sugar", _text_strategy(PP_BL_SUGAR)),
            TextStrategy("pp_near_keyword", _text_strategy(PP_NEAR_KEYWORD)),
        ],
        validator=numeric_validator(_checker, BLOOD_SUGAR_PP),
    )

    hba1c = FieldMatcher(
        HBA1C_VALUE,
        cue=HBA1C_CUE,
        line_strategies=[
            LineStrategy("hba1c_inline", hba1c_inline),
            LineStrategy("hba1c_loose", hba1c_loose),
            LineStrategy("hba1c_next_line", partial(below_label, value_pattern=BARE_PERCENT_VALUE)),
        ],
        text_strategies=[
            TextStrategy("hba1c_labelled", _text_strategy(HBA1C_LABELLED)),
            TextStrategy(
                "hba1c_table_scan",
                partial(hba1c_table_scan, lookahead=settings.TABLE_LOOKAHEAD),
            ),
            TextStrategy("hba1c_anywhere_after", _text_strategy(HBA1C_ANYWHERE_AFTER)),
        ],
        validator=make_hba1c_validator(settings.RANGE_CONTEXT_WINDOW),
    )

    return [fasting, post_prandial, hba1c]
