# ============================================================================
# src/lab_report_extraction/matchers/base.py
# ============================================================================
"""
Field Matcher Base

A field matcher is an ordered list of named strategies that share one
interface. Each strategy is a generator of raw candidates; the matcher runs
every candidate through the field's validator and the first one accepted
wins. Strategy order is therefore the precedence order for the field.

Two kinds of strategy:
- LineStrategy(source, index): tabular pass, one line plus its lookahead
- TextStrategy(source): narrative pass, whole text
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Pattern, Sequence, Tuple

from ..core.context import SourceText

logger = logging.getLogger(__name__)

# Number that is not a fragment of a longer number (2-3 digits, optional decimals)
NUMBER = r"(?<![\d.])(\d{2,3}(?:\.\d+)?)(?!\d)"

# Short numeric result (HbA1c style: 5.6, 12.1)
PERCENT_NUMBER = r"(?<![\d.])(\d{1,2}(?:\.\d+)?)(?!\d)"

# Any number on a line that is not part of a label like "HbA1c"
NUMBER_TOKEN = re.compile(r"(?<![A-Za-z\d.])\d+(?:\.\d+)?")


@dataclass
class Candidate:
    value: str
    evidence: str = ""         # substring scored by the confidence estimator
    position: int = -1         # offset of the evidence in SourceText.text
    strategy: str = ""
    tentative: bool = False    # kept only until a better value is known
    companions: Dict[str, "Candidate"] = field(default_factory=dict)

    def __post_init__(self):
        if not self.evidence:
            self.evidence = self.value


Validator = Callable[[Candidate, SourceText], Tuple[bool, Optional[str]]]


@dataclass(frozen=True)
class LineStrategy:
    name: str
    func: Callable[[SourceText, int], Iterable[Candidate]]

    def try_match(self, source: SourceText, index: int) -> Iterator[Candidate]:
        yield from self.func(source, index) or ()


@dataclass(frozen=True)
class TextStrategy:
    name: str
    func: Callable[[SourceText], Iterable[Candidate]]

    def try_match(self, source: SourceText) -> Iterator[Candidate]:
        yield from self.func(source) or ()


def accept_all(candidate: Candidate, source: SourceText) -> Tuple[bool, Optional[str]]:
    return True, None


class FieldMatcher:
    """
    Strategy chain for one field.

    Args:
        field_name: Canonical field name
        cue: Label pattern a line must contain before line strategies run
        line_strategies: Tabular pass strategies, in precedence order
        text_strategies: Narrative pass strategies, in precedence order
        validator: Gate every candidate must pass
    """

    def __init__(
        self,
        field_name: str,
        cue: Pattern,
        line_strategies: Sequence[LineStrategy] = (),
        text_strategies: Sequence[TextStrategy] = (),
        validator: Validator = accept_all,
    ):
        self.field_name = field_name
        self.cue = cue
        self.line_strategies: List[LineStrategy] = list(line_strategies)
        self.text_strategies: List[TextStrategy] = list(text_strategies)
        self.validator = validator

    def has_cue(self, line_text: str) -> bool:
        return self.cue.search(line_text) is not None

    def match_line(self, source: SourceText, index: int) -> Optional[Candidate]:
        """Tabular pass: try line strategies if the line carries this field's label."""
        if not self.has_cue(source.lines[index].text):
            return None

        for strategy in self.line_strategies:
            accepted = self._first_accepted(strategy.name, strategy.try_match(source, index), source)
            if accepted:
                return accepted
        return None

    def match_text(self, source: SourceText) -> Optional[Candidate]:
        """Narrative pass: try whole-text strategies."""
        for strategy in self.text_strategies:
            accepted = self._first_accepted(strategy.name, strategy.try_match(source), source)
            if accepted:
                return accepted
        return None

    def _first_accepted(
        self,
        strategy_name: str,
        candidates: Iterable[Candidate],
        source: SourceText,
    ) -> Optional[Candidate]:
        for candidate in candidates:
            candidate.strategy = strategy_name
            ok, reason = self.validator(candidate, source)
            if ok:
                logger.debug(
                    f"{self.field_name}: accepted '{candidate.value}' via {strategy_name} "
                    f"at {candidate.position}"
                )
                return candidate
            logger.debug(f"{self.field_name}: rejected '{candidate.value}' via {strategy_name}: {reason}")
        return None

    def __repr__(self) -> str:
        return (
            f"FieldMatcher({self.field_name!r}, "
            f"line={[s.name for s in self.line_strategies]}, "
            f"text={[s.name for s in self.text_strategies]})"
        )


# ============================================================================
# SHARED STRATEGY HELPERS
# ============================================================================

def iter_matches(
    pattern: Pattern,
    text: str,
    offset: int = 0,
    group: int = 1,
    transform: Optional[Callable[[str], str]] = None,
) -> Iterator[Candidate]:
    """Yield one candidate per regex hit, value from `group`."""
    for match in pattern.finditer(text):
        raw = match.group(group)
        if raw is None:
            continue
        raw = raw.strip()
        value = transform(raw) if transform else raw
        if value:
            yield Candidate(value=value, evidence=raw, position=offset + match.start(group))


def is_label_only(line_text: str) -> bool:
    """True if a line carries no number of its own (so its value sits below it)."""
    return NUMBER_TOKEN.search(line_text) is None


def values_below(
    source: SourceText,
    index: int,
    value_pattern: Pattern,
    lookahead: int,
) -> Iterator[Candidate]:
    """Yield lines below `index` that consist of nothing but a value."""
    for line in source.following(index, lookahead):
        match = value_pattern.match(line.text)
        if match:
            raw = match.group(1).strip()
            yield Candidate(value=raw, position=line.offset + match.start(1))


def line_matches(pattern: Pattern, source: SourceText, index: int, **kwargs) -> Iterator[Candidate]:
    """iter_matches over a single line, with offsets mapped to the full text."""
    line = source.lines[index]
    return iter_matches(pattern, line.text, offset=line.offset, **kwargs)


def text_matches(pattern: Pattern, source: SourceText, **kwargs) -> Iterator[Candidate]:
    return iter_matches(pattern, source.text, **kwargs)


def numeric_validator(checker, field_name: str) -> Validator:
    """Validator that only applies the field's plausibility range."""
    def validate(candidate: Candidate, source: SourceText) -> Tuple[bool, Optional[str]]:
        return checker.check_raw(field_name, candidate.value)
    return validate
