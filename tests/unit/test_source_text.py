# ============================================================================
# FILE: tests/unit/test_source_text.py
# ============================================================================
"""
Unit tests for SourceText and RecognizedWord
"""

import pytest

from lab_report_extraction.core.context import RecognizedWord, SourceText
from lab_report_extraction.utils.exceptions import OCRWordError, WordListError


def test_lines_are_trimmed_and_non_empty():
    """Blank lines are dropped, surrounding whitespace removed"""
    source = SourceText("  Patient Name: JOHN  \n\n\t\nAge: 45\n")

    assert [line.text for line in source.lines] == ["Patient Name: JOHN", "Age: 45"]
    assert [line.index for line in source.lines] == [0, 1]


def test_line_offsets_point_into_text():
    """Line offsets address the first character of the trimmed line"""
    source = SourceText("  Patient Name: JOHN  \n\nAge: 45")

    for line in source.lines:
        assert source.text[line.offset:line.offset + len(line.text)] == line.text


def test_caption_is_prepended():
    """Caption comes first, separated by a newline"""
    source = SourceText("HbA1c: 5.6%", "Photo of a lab report")

    assert source.text == "Photo of a lab report\nHbA1c: 5.6%"
    assert source.lines[0].text == "Photo of a lab report"
    assert source.caption_text == "Photo of a lab report"


def test_blank_caption_is_ignored():
    """Empty or whitespace captions leave the OCR text alone"""
    assert SourceText("HbA1c: 5.6%", "   ").text == "HbA1c: 5.6%"
    assert SourceText("HbA1c: 5.6%", None).text == "HbA1c: 5.6%"


def test_empty_source():
    """No lines means nothing to extract"""
    assert SourceText("").is_empty
    assert SourceText(" \n \n").is_empty
    assert not SourceText("x").is_empty


def test_following_and_head():
    """Lookahead helpers never run past the end"""
    source = SourceText("a\nb\nc\nd")

    assert [line.text for line in source.following(1, 2)] == ["c", "d"]
    assert [line.text for line in source.following(3, 2)] == []
    assert [line.text for line in source.head(2)] == ["a", "b"]


def test_line_at():
    """Character positions map back to their line"""
    source = SourceText("first line\nsecond line")

    assert source.line_at(3).text == "first line"
    assert source.line_at(source.text.index("second")).text == "second line"
    assert source.line_at(10) is None


def test_lower_matches_text():
    source = SourceText("HBA1C", "Caption")

    assert source.lower == source.text.lower()
    assert len(source) == len(source.text)


def test_word_from_dict():
    """OCR payloads with a bbox list or mapping"""
    word = RecognizedWord.from_dict({"text": "98", "confidence": 91, "bbox": [1, 2, 3, 4]})

    assert word.text == "98"
    assert word.confidence == 91.0
    assert word.bbox == (1.0, 2.0, 3.0, 4.0)

    word = RecognizedWord.from_dict(
        {"text": "98", "conf": "88.5", "bbox": {"x0": 1, "y0": 2, "x1": 3, "y1": 4}}
    )
    assert word.confidence == 88.5
    assert word.bbox == (1.0, 2.0, 3.0, 4.0)


def test_word_without_bbox():
    word = RecognizedWord.from_dict({"text": "HbA1c", "confidence": 70})

    assert word.bbox is None


def test_word_is_immutable():
    word = RecognizedWord("98", 90.0)

    with pytest.raises(AttributeError):
        word.text = "99"


@pytest.mark.parametrize("payload", [
    {"confidence": 90},
    {"text": 98, "confidence": 90},
    {"text": "98", "confidence": "high"},
    {"text": "98", "confidence": 90, "bbox": [1, 2]},
    {"text": "98", "confidence": 90, "bbox": {"x0": 1}},
    "98",
])
def test_malformed_word(payload):
    """Malformed OCR entries raise OCRWordError"""
    with pytest.raises(OCRWordError):
        RecognizedWord.from_dict(payload)


def test_word_error_is_word_list_error():
    assert issubclass(OCRWordError, WordListError)
