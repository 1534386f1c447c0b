# ============================================================================
# src/lab_report_extraction/matchers/practitioner.py
# ============================================================================
"""
Referring Doctor Matcher

Cues: "Doctor:", "Ref.By Dr:", "REF. BY: DR.", "Referred By", "Dr. <name>".

Self-referred patients are printed as "Ref. By: SELF" / "Dr. SELF"; the
literal SELF is a terminal value and skips the length and stoplist checks.
"""

import re
from functools import partial
from typing import Iterator, List, Optional, Tuple

from ..config import ThresholdSettings
from ..constants import DOCTOR_NAME, SELF_REFERRAL
from ..core.context import SourceText
from ..utils.parsing import clean_trailing_punctuation, collapse_whitespace
from ..validators import PlausibilityChecker, find_excluded_word
from .base import Candidate, FieldMatcher, LineStrategy, TextStrategy, line_matches, text_matches

_checker = PlausibilityChecker()

DOCTOR_LABEL = (
    r"(?:\bdoctor(?:'?s)?(?:\s+name)?"
    r"|\bref(?:erred)?\.?\s*by(?:[\s:.]*dr\b\.?)?)"
)
# Labels that commonly share the doctor's line
FOLLOWING_LABEL = r"(?:date|sample|report|collection|collected|received|bill|reg)"

DOCTOR_CUE = re.compile(r"\bdoctor|\bref(?:erred)?\.?\s*by\b", re.IGNORECASE)
DOCTOR_INLINE = re.compile(
    DOCTOR_LABEL + r"[\s:.\-]+(.+?)(?=\s+\b" + FOLLOWING_LABEL + r"\b|\s*$)",
    re.IGNORECASE,
)
DOCTOR_LABEL_ONLY = re.compile(r"^" + DOCTOR_LABEL + r"\s*[:\-.]*$", re.IGNORECASE)
DR_ON_OWN_LINE = re.compile(r"^(dr\b\.?\s*[A-Z][A-Za-z .,]{2,80})", re.IGNORECASE)
SELF_ON_OWN_LINE = re.compile(r"^(?:dr\b\.?\s*)?(self)\b", re.IGNORECASE)

NARRATIVE_END = r"(?=\s*\b(?:date|sample|report|collection|received|bill)\b|\s*$)"
DOCTOR_LABELLED = re.compile(
    r"\bdoctor(?:'?s)?(?:\s+name)?[\s:]+(.+?)" + NARRATIVE_END,
    re.IGNORECASE | re.MULTILINE,
)
REF_BY_DR = re.compile(
    r"\bref(?:erred)?\.?\s*by[\s:]+dr\b\.?\s*([A-Z][A-Za-z .,]{0,80}?)" + NARRATIVE_END,
    re.IGNORECASE | re.MULTILINE,
)
REF_BY = re.compile(
    r"\bref(?:erred)?\.?\s*by(?:\s*dr\b\.?)?[\s:]+([A-Z][A-Za-z .,]{2,80}?)" + NARRATIVE_END,
    re.IGNORECASE | re.MULTILINE,
)
DR_PREFIXED = re.compile(
    r"\bdr\b\.?[\s:]*([A-Z][A-Za-z .,]{3,80}?)" + NARRATIVE_END,
    re.IGNORECASE | re.MULTILINE,
)
DOCTOR_LABEL_LINE = re.compile(r"\bdoctor\b.*:", re.IGNORECASE)
SELF_REFERRED = re.compile(
    r"\bref(?:erred)?\.?\s*by(?:[\s:]*dr\b\.?)?[\s:]*(self)\b",
    re.IGNORECASE,
)
STARTS_WITH_SELF = re.compile(r"^self\b", re.IGNORECASE)


def clean_doctor_name(raw: str) -> str:
    name = collapse_whitespace(clean_trailing_punctuation(raw))
    if STARTS_WITH_SELF.match(name):
        return SELF_REFERRAL
    return name


def validate_doctor_name(candidate: Candidate, source: SourceText) -> Tuple[bool, Optional[str]]:
    name = candidate.value
    if name == SELF_REFERRAL:
        return True, None

    ok, reason = _checker.check_length(DOCTOR_NAME, name)
    if not ok:
        return False, reason

    excluded = find_excluded_word(DOCTOR_NAME, name)
    if excluded:
        return False, f"Contains stoplisted word '{excluded}'"

    return True, None


def doctor_inline(source: SourceText, index: int) -> Iterator[Candidate]:
    yield from line_matches(DOCTOR_INLINE, source, index, transform=clean_doctor_name)


def doctor_next_line(source: SourceText, index: int) -> Iterator[Candidate]:
    if not DOCTOR_LABEL_ONLY.match(source.lines[index].text):
        return
    yield from _name_below(source, index)


def _name_below(source: SourceText, index: int) -> Iterator[Candidate]:
    for line in source.following(index, 1):
        self_match = SELF_ON_OWN_LINE.match(line.text)
        if self_match:
            yield Candidate(value=SELF_REFERRAL, position=line.offset + self_match.start(1))
            continue
        match = DR_ON_OWN_LINE.match(line.text)
        if match:
            yield Candidate(
                value=clean_doctor_name(match.group(1)),
                evidence=match.group(1),
                position=line.offset,
            )


def _narrative(pattern):
    def strategy(source: SourceText) -> Iterator[Candidate]:
        yield from text_matches(pattern, source, transform=clean_doctor_name)
    return strategy


def doctor_label_scan(source: SourceText, max_lines: int) -> Iterator[Candidate]:
    """'Doctor:' label in the leading lines with 'Dr. <name>' on the next line."""
    for line in source.head(max_lines):
        if DOCTOR_LABEL_LINE.search(line.text):
            yield from _name_below(source, line.index)


def self_referral(source: SourceText) -> Iterator[Candidate]:
    for match in SELF_REFERRED.finditer(source.text):
        yield Candidate(value=SELF_REFERRAL, position=match.start(1))


def build_practitioner_matchers(settings: ThresholdSettings) -> List[FieldMatcher]:
    return [
        FieldMatcher(
            DOCTOR_NAME,
            cue=DOCTOR_CUE,
            line_strategies=[
                LineStrategy("doctor_inline", doctor_inline),
                LineStrategy("doctor_next_line", doctor_next_line),
            ],
            text_strategies=[
                TextStrategy("doctor_labelled", _narrative(DOCTOR_LABELLED)),
                TextStrategy("ref_by_dr", _narrative(REF_BY_DR)),
                TextStrategy("ref_by", _narrative(REF_BY)),
                TextStrategy("dr_prefixed", _narrative(DR_PREFIXED)),
                TextStrategy(
                    "doctor_label_scan",
                    partial(doctor_label_scan, max_lines=settings.DOCTOR_SCAN_LINES),
                ),
                TextStrategy("self_referral", self_referral),
            ],
            validator=validate_doctor_name,
        )
    ]
