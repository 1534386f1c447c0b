# ============================================================================
# src/lab_report_extraction/matchers/patient.py
# ============================================================================
"""
Patient Matchers
- Patient name: "Patient Name:", "Name:", Mr./Mrs./Ms./Miss prefix, bare header line
- Age: "Age/Sex: 45/M", "Age: 45 Years", "45 yrs", "45/M"
- Gender: "Sex: Male", male/female tokens, M/F next to the age

The age patterns that also capture M/F hand gender over as a companion
candidate; the orchestrator applies it only if gender is still unresolved.
"""

import re
from functools import partial
from typing import Iterator, List, Optional, Tuple

from ..config import ThresholdSettings
from ..constants import (
    PATIENT_NAME,
    AGE,
    GENDER,
    GENDER_VALUES,
    MINOR_AGE_RANGE,
)
from ..core.context import SourceText
from ..utils.parsing import collapse_whitespace, parse_numeric_value
from ..validators import PlausibilityChecker, find_excluded_word
from .base import (
    Candidate,
    FieldMatcher,
    LineStrategy,
    TextStrategy,
    is_label_only,
    line_matches,
    text_matches,
    values_below,
)

_checker = PlausibilityChecker()

# ============================================================================
# PATIENT NAME
# ============================================================================

PREFIX = r"(?:(?:mrs|mr|ms|miss)(?:\.\s*|\s+))"
NAME_LABEL = r"(?:\bpatient\s*name|(?<!lab\s)(?<!doctor\s)(?<!test\s)\bname)"
NAME_TERMINATOR = (
    r"(?=\s+(?:age|sex|gender|male|female|years|yrs|yr|received|ref|date|doctor|dr)\b"
    r"|\s*/|\s*$)"
)

NAME_CUE = re.compile(NAME_LABEL + r"\b", re.IGNORECASE)
NAME_INLINE = re.compile(
    NAME_LABEL + r"(?:\s*[:\-]\s*|\s+)" + PREFIX + r"?([A-Z][A-Za-z ]{2,40})",
    re.IGNORECASE,
)
NAME_LABEL_ONLY = re.compile(r"^" + NAME_LABEL + r"\s*[:\-]?$", re.IGNORECASE)
NAME_ON_OWN_LINE = re.compile(r"^" + PREFIX + r"?([A-Z][A-Za-z ]{2,40})$", re.IGNORECASE)

NAME_LABELLED = re.compile(
    NAME_LABEL + r"(?:[ \t]*[:\-][ \t]*|[ \t]+)" + PREFIX + r"?([A-Z][A-Za-z ]{2,40}?)" + NAME_TERMINATOR,
    re.IGNORECASE | re.MULTILINE,
)
NAME_PREFIXED = re.compile(
    r"\b(?:mrs|mr|ms|miss)(?:\.[ \t]*|[ \t]+)([A-Z][A-Za-z ]{2,40}?)" + NAME_TERMINATOR,
    re.IGNORECASE | re.MULTILINE,
)
PREFIXED_IN_LINE = re.compile(r"\b(?:mrs|mr|ms|miss)(?:\.\s*|\s+)([A-Z][A-Za-z ]{2,40})", re.IGNORECASE)
# Case-sensitive: a header line that starts with a capital and holds only letters
BARE_NAME_LINE = re.compile(r"^[A-Z][A-Za-z ]{2,40}$")

# Labels that follow the name on the same line ("Name: JOHN DOE Age: 45")
TRAILING_LABEL = re.compile(
    r"\s+(?:age|sex|gender|male|female|years?|yrs?|received|ref|date|doctor|dr"
    r"|uhid|id|mobile|phone)\b.*$",
    re.IGNORECASE,
)
NAME_CHARACTERS = re.compile(r"^[A-Za-z][A-Za-z .']*$")


def clean_name(raw: str) -> str:
    return collapse_whitespace(TRAILING_LABEL.sub("", raw))


def validate_patient_name(candidate: Candidate, source: SourceText) -> Tuple[bool, Optional[str]]:
    name = candidate.value

    if not NAME_CHARACTERS.match(name):
        return False, "Contains non-alphabetic characters"

    ok, reason = _checker.check_length(PATIENT_NAME, name)
    if not ok:
        return False, reason

    excluded = find_excluded_word(PATIENT_NAME, name)
    if excluded:
        return False, f"Contains stoplisted word '{excluded}'"

    return True, None


def name_inline(source: SourceText, index: int) -> Iterator[Candidate]:
    yield from line_matches(NAME_INLINE, source, index, transform=clean_name)


def name_next_line(source: SourceText, index: int) -> Iterator[Candidate]:
    if not NAME_LABEL_ONLY.match(source.lines[index].text):
        return
    for line in source.following(index, 1):
        match = NAME_ON_OWN_LINE.match(line.text)
        if match:
            yield Candidate(value=clean_name(match.group(1)), position=line.offset + match.start(1))


def name_labelled(source: SourceText) -> Iterator[Candidate]:
    yield from text_matches(NAME_LABELLED, source, transform=collapse_whitespace)


def name_prefixed(source: SourceText) -> Iterator[Candidate]:
    yield from text_matches(NAME_PREFIXED, source, transform=collapse_whitespace)


def name_header_scan(source: SourceText, max_lines: int) -> Iterator[Candidate]:
    """Leading lines: a prefixed name anywhere in the line, or a bare capitalised line."""
    for line in source.head(max_lines):
        match = PREFIXED_IN_LINE.search(line.text)
        if match:
            yield Candidate(value=clean_name(match.group(1)), position=line.offset + match.start(1))
        if BARE_NAME_LINE.match(line.text):
            yield Candidate(value=collapse_whitespace(line.text), position=line.offset)


# ============================================================================
# AGE
# ============================================================================

AGE_LABEL = r"\bage\s*(?:/\s*(?:sex|gender))?"
YEARS_UNIT = r"\s*(?:y(?:ea)?rs?\.?|y\b)?"
GENDER_SUFFIX = r"(?:\s*[/,]?\s*(male|female|m|f)\b)?"

AGE_CUE = re.compile(r"\bage\b", re.IGNORECASE)
AGE_INLINE = re.compile(
    AGE_LABEL + r"[\s:.\-]+(\d{2,3})(?!\d)" + YEARS_UNIT + GENDER_SUFFIX,
    re.IGNORECASE,
)
AGE_LABEL_ONLY = re.compile(r"^" + AGE_LABEL + r"\s*[:\-]?$", re.IGNORECASE)
AGE_ON_OWN_LINE = re.compile(
    r"^(\d{2,3})(?!\d)\s*(?:y(?:ea)?rs?\.?|y)?(?:\s*[/,]?\s*(male|female|m|f))?$",
    re.IGNORECASE,
)

AGE_SEX = re.compile(
    r"\bage\s*/\s*sex[\s:]*(\d{2,3})(?!\d)" + YEARS_UNIT + r"\s*[/\s,]*(male|female|m|f)\b",
    re.IGNORECASE,
)
AGE_LABELLED = re.compile(r"\bage[\s/:]+(\d{2,3})(?!\d)", re.IGNORECASE)
AGE_YEARS = re.compile(r"(?<![\d.])(\d{2,3})\s*(?:years?|yrs?|yr)\b", re.IGNORECASE)
AGE_SLASH_GENDER = re.compile(r"(?<![\d.])(\d{2,3})\s*/\s*[MF]\b", re.IGNORECASE)


def normalize_gender(raw: str) -> str:
    return GENDER_VALUES.get(raw.strip()[:1].upper(), "")


def _age_candidates(pattern, text: str, offset: int) -> Iterator[Candidate]:
    for match in pattern.finditer(text):
        candidate = Candidate(value=match.group(1), position=offset + match.start(1))
        if pattern.groups >= 2 and match.group(2):
            candidate.companions[GENDER] = Candidate(
                value=normalize_gender(match.group(2)),
                evidence=match.group(2),
                position=offset + match.start(2),
            )
        yield candidate


def validate_age(candidate: Candidate, source: SourceText) -> Tuple[bool, Optional[str]]:
    if candidate.tentative:
        value = parse_numeric_value(candidate.value)
        low, high = MINOR_AGE_RANGE
        if value is not None and low <= value < high:
            return True, None
        return False, f"Not a usable fallback age: {candidate.value}"
    return _checker.check_raw(AGE, candidate.value)


def age_inline(source: SourceText, index: int) -> Iterator[Candidate]:
    line = source.lines[index]
    yield from _age_candidates(AGE_INLINE, line.text, line.offset)


def age_next_line(source: SourceText, index: int, lookahead: int) -> Iterator[Candidate]:
    if not AGE_LABEL_ONLY.match(source.lines[index].text):
        return
    for line in source.following(index, lookahead):
        yield from _age_candidates(AGE_ON_OWN_LINE, line.text, line.offset)


def age_with_sex(source: SourceText) -> Iterator[Candidate]:
    yield from _age_candidates(AGE_SEX, source.text, 0)


def age_labelled(source: SourceText) -> Iterator[Candidate]:
    yield from text_matches(AGE_LABELLED, source)


def age_in_years(source: SourceText) -> Iterator[Candidate]:
    yield from text_matches(AGE_YEARS, source)


def age_slash_gender(source: SourceText) -> Iterator[Candidate]:
    yield from text_matches(AGE_SLASH_GENDER, source)


def minor_age_fallback(source: SourceText) -> Iterator[Candidate]:
    """Any age below 18, held tentatively for the age re-check."""
    for pattern in (AGE_LABELLED, AGE_YEARS, AGE_SLASH_GENDER):
        for candidate in text_matches(pattern, source):
            candidate.tentative = True
            yield candidate


# ============================================================================
# GENDER
# ============================================================================

GENDER_CUE = re.compile(r"\b(?:sex|gender)\b", re.IGNORECASE)
GENDER_INLINE = re.compile(r"\b(?:sex|gender)\s*[:\-]?\s*(male|female|m|f)\b", re.IGNORECASE)
GENDER_LABEL_ONLY = re.compile(r"^(?:sex|gender)\s*[:\-]?$", re.IGNORECASE)
GENDER_ON_OWN_LINE = re.compile(r"^(male|female|m|f)$", re.IGNORECASE)

MALE_TOKEN = re.compile(r"\b(male)\b", re.IGNORECASE)
FEMALE_TOKEN = re.compile(r"\b(female)\b", re.IGNORECASE)
GENDER_AFTER_AGE = re.compile(r"(?:age\s*/\s*sex|sex|gender)[\s:]*\d+\s*[/\s]+([MF])\b", re.IGNORECASE)
GENDER_AFTER_SLASH = re.compile(r"\d{2,3}\s*/\s*([MF])\b", re.IGNORECASE)
# Case-sensitive: a lone capital M or F
GENDER_LETTER = re.compile(r"\b([MF])\b(?=\s|$)", re.MULTILINE)


def validate_gender(candidate: Candidate, source: SourceText) -> Tuple[bool, Optional[str]]:
    if candidate.value in GENDER_VALUES.values():
        return True, None
    return False, f"Unknown gender value: {candidate.value!r}"


def gender_inline(source: SourceText, index: int) -> Iterator[Candidate]:
    yield from line_matches(GENDER_INLINE, source, index, transform=normalize_gender)


def gender_next_line(source: SourceText, index: int) -> Iterator[Candidate]:
    if not GENDER_LABEL_ONLY.match(source.lines[index].text):
        return
    for line in source.following(index, 1):
        match = GENDER_ON_OWN_LINE.match(line.text)
        if match:
            yield Candidate(
                value=normalize_gender(match.group(1)),
                evidence=match.group(1),
                position=line.offset,
            )


def _gender_strategy(pattern):
    def strategy(source: SourceText) -> Iterator[Candidate]:
        yield from text_matches(pattern, source, transform=normalize_gender)
    return strategy


# ============================================================================
# FACTORY
# ============================================================================

def build_patient_matchers(settings: ThresholdSettings) -> List[FieldMatcher]:
    name_matcher = FieldMatcher(
        PATIENT_NAME,
        cue=NAME_CUE,
        line_strategies=[
            LineStrategy("name_inline", name_inline),
            LineStrategy("name_next_line", name_next_line),
        ],
        text_strategies=[
            TextStrategy("name_labelled", name_labelled),
            TextStrategy("name_prefixed", name_prefixed),
            TextStrategy(
                "name_header_scan",
                partial(name_header_scan, max_lines=settings.HEADER_SCAN_LINES),
            ),
        ],
        validator=validate_patient_name,
    )

    age_matcher = FieldMatcher(
        AGE,
        cue=AGE_CUE,
        line_strategies=[
            LineStrategy("age_inline", age_inline),
            LineStrategy(
                "age_next_line",
                partial(age_next_line, lookahead=settings.LINE_LOOKAHEAD),
            ),
        ],
        text_strategies=[
            TextStrategy("age_with_sex", age_with_sex),
            TextStrategy("age_labelled", age_labelled),
            TextStrategy("age_in_years", age_in_years),
            TextStrategy("age_slash_gender", age_slash_gender),
            TextStrategy("minor_age_fallback", minor_age_fallback),
        ],
        validator=validate_age,
    )

    gender_matcher = FieldMatcher(
        GENDER,
        cue=GENDER_CUE,
        line_strategies=[
            LineStrategy("gender_inline", gender_inline),
            LineStrategy("gender_next_line", gender_next_line),
        ],
        text_strategies=[
            TextStrategy("male_token", _gender_strategy(MALE_TOKEN)),
            TextStrategy("female_token", _gender_strategy(FEMALE_TOKEN)),
            TextStrategy("gender_after_age", _gender_strategy(GENDER_AFTER_AGE)),
            TextStrategy("gender_after_slash", _gender_strategy(GENDER_AFTER_SLASH)),
            TextStrategy("gender_letter", _gender_strategy(GENDER_LETTER)),
        ],
        validator=validate_gender,
    )

    return [name_matcher, age_matcher, gender_matcher]
