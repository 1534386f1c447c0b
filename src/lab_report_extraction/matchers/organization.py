# ============================================================================
# src/lab_report_extraction/matchers/organization.py
# ============================================================================
"""
Lab Name Matcher

Lab names usually sit in the report header, either labelled ("Lab Name:")
or as a letterhead line ending in Laboratory / Diagnostics / Hospital /
Centre. Group-owned labs print "(A Unit of ... Laboratories)", which names
the lab more completely than the letterhead and is tried first.

Known vendors are recognised by name alone; the whole header line is taken
as the lab name and completed by the normalizer.
"""

import re
from typing import Iterator, List, Optional, Tuple

from ..config import ThresholdSettings
from ..constants import LAB_NAME, KNOWN_LAB_PATTERNS
from ..core.context import SourceText
from ..utils.parsing import clean_trailing_punctuation, collapse_whitespace
from ..validators import PlausibilityChecker, find_excluded_word
from .base import Candidate, FieldMatcher, LineStrategy, TextStrategy, line_matches, text_matches

_checker = PlausibilityChecker()

LAB_CHARS = r"[A-Za-z &.,'\-]"
LAB_SUFFIX = r"(?:laboratories|laboratory|labs?|diagnostics?|cent(?:re|er)|hospitals?)"
LAB_LABEL = r"\b(?:lab(?:oratory)?\s*name|lab(?:oratory)?(?=\s*:))"

LAB_CUE = re.compile(LAB_LABEL, re.IGNORECASE)
LAB_INLINE = re.compile(
    LAB_LABEL + r"\s*[:\-]?\s*([A-Z]" + LAB_CHARS + r"{4,100}?)\s*$",
    re.IGNORECASE,
)
LAB_LABEL_ONLY = re.compile(r"^" + LAB_LABEL + r"\s*[:\-]?$", re.IGNORECASE)
LAB_ON_OWN_LINE = re.compile(r"^([A-Z]" + LAB_CHARS + r"{4,100})$", re.IGNORECASE)

UNIT_OF_FULL = re.compile(
    r"\bA\s+Unit\s+of\s+[A-Za-z &.,'\-]+?laborator(?:ies|y)",
    re.IGNORECASE,
)
UNIT_OF_PARTIAL = re.compile(
    r"\bA\s+Unit\s+of\s+[A-Z][A-Za-z &.,'\-]{4,60}?(?=\s*(?:\)|$))",
    re.IGNORECASE | re.MULTILINE,
)
LAB_LABELLED = re.compile(
    r"\b(?:lab|laboratory|diagnostic|centre|center)[ \t]*:[ \t]*"
    r"([A-Z][A-Za-z &.,'\-]{4,100}?)[ \t]*"
    r"(?=$|\b(?:address|phone|email|established|estd|patient|name)\b)",
    re.IGNORECASE | re.MULTILINE,
)
LAB_WITH_SUFFIX = re.compile(
    r"([A-Z][A-Za-z &.,'\-]{4,100}[ \t]+" + LAB_SUFFIX + r")\b",
    re.IGNORECASE,
)
KNOWN_LABS = [re.compile(pattern, re.IGNORECASE) for pattern in KNOWN_LAB_PATTERNS]


def clean_lab_name(raw: str) -> str:
    return collapse_whitespace(clean_trailing_punctuation(raw.strip("() \t")))


def validate_lab_name(candidate: Candidate, source: SourceText) -> Tuple[bool, Optional[str]]:
    name = candidate.value

    ok, reason = _checker.check_length(LAB_NAME, name)
    if not ok:
        return False, reason

    excluded = find_excluded_word(LAB_NAME, name)
    if excluded:
        return False, f"Contains stoplisted word '{excluded}'"

    return True, None


def lab_inline(source: SourceText, index: int) -> Iterator[Candidate]:
    yield from line_matches(LAB_INLINE, source, index, transform=clean_lab_name)


def lab_next_line(source: SourceText, index: int) -> Iterator[Candidate]:
    if not LAB_LABEL_ONLY.match(source.lines[index].text):
        return
    for line in source.following(index, 1):
        match = LAB_ON_OWN_LINE.match(line.text)
        if match:
            yield Candidate(value=clean_lab_name(match.group(1)), position=line.offset)


def unit_of_group(source: SourceText) -> Iterator[Candidate]:
    """'(A Unit of X Laboratories)', or 'A Unit of X' when the suffix is missing."""
    for pattern in (UNIT_OF_FULL, UNIT_OF_PARTIAL):
        yield from text_matches(pattern, source, group=0, transform=clean_lab_name)


def lab_labelled(source: SourceText) -> Iterator[Candidate]:
    yield from text_matches(LAB_LABELLED, source, transform=clean_lab_name)


def known_lab(source: SourceText) -> Iterator[Candidate]:
    for pattern in KNOWN_LABS:
        for match in pattern.finditer(source.text):
            line = source.line_at(match.start())
            if line is None:
                continue
            yield Candidate(
                value=clean_lab_name(line.text),
                evidence=match.group(0),
                position=line.offset,
            )


def lab_with_suffix(source: SourceText) -> Iterator[Candidate]:
    # One line at a time so a header never swallows the line below it
    for line in source.lines:
        yield from _suffix_candidates(line)


def _suffix_candidates(line) -> Iterator[Candidate]:
    for match in LAB_WITH_SUFFIX.finditer(line.text):
        raw = match.group(1)
        yield Candidate(
            value=clean_lab_name(raw),
            evidence=raw.strip(),
            position=line.offset + match.start(1),
        )


def build_organization_matchers(settings: ThresholdSettings) -> List[FieldMatcher]:
    return [
        FieldMatcher(
            LAB_NAME,
            cue=LAB_CUE,
            line_strategies=[
                LineStrategy("lab_inline", lab_inline),
                LineStrategy("lab_next_line", lab_next_line),
            ],
            text_strategies=[
                TextStrategy("unit_of_group", unit_of_group),
                TextStrategy("lab_labelled", lab_labelled),
                TextStrategy("known_lab", known_lab),
                TextStrategy("lab_with_suffix", lab_with_suffix),
            ],
            validator=validate_lab_name,
        )
    ]
