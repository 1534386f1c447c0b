# ============================================================================
# FILE: tests/unit/test_cli.py
# ============================================================================
"""
Unit tests for the lab-extract command line tool
"""

import json
import logging

import pytest

from lab_report_extraction.cli import main


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger; put it back after each test"""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def report_file(tmp_path, simple_report_text):
    path = tmp_path / "report.txt"
    path.write_text(simple_report_text, encoding="utf-8")
    return path


def test_full_output(report_file, capsys):
    exit_code = main([str(report_file)])

    assert exit_code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["patient_name"] == "JOHN DOE"
    assert data["hba1c_value"] == "5.6"
    assert data["low_confidence_flags"] == [
        "patient_name", "age", "gender", "blood_sugar_fasting", "hba1c_value",
    ]


def test_words_and_caption(report_file, tmp_path, simple_report_words, capsys):
    words_path = tmp_path / "words.json"
    words_path.write_text(json.dumps(simple_report_words), encoding="utf-8")

    exit_code = main([
        str(report_file),
        "--words", str(words_path),
        "--caption", "Apollo Diagnostics",
    ])

    assert exit_code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["lab_name"] == "Apollo Diagnostics"
    assert data["confidence"]["hba1c_value"] == 92.0
    assert "hba1c_value" not in data["low_confidence_flags"]


def test_caption_file(report_file, tmp_path, capsys):
    caption_path = tmp_path / "caption.txt"
    caption_path.write_text("Apollo Diagnostics\n", encoding="utf-8")

    assert main([str(report_file), "--caption-file", str(caption_path)]) == 0
    assert json.loads(capsys.readouterr().out)["lab_name"] == "Apollo Diagnostics"


def test_report_format(report_file, capsys):
    assert main([str(report_file), "--format", "report"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["sugar_fasting"] == "98"
    assert data["hba1c"] == "5.6"
    assert "confidence" not in data


def test_summary_format(report_file, capsys):
    assert main([str(report_file), "--format", "summary"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["summary"]["resolved"] == 5
    assert data["summary"]["requires_review"] is True


def test_missing_text_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert capsys.readouterr().out == ""


def test_bad_word_list(report_file, tmp_path, capsys):
    words_path = tmp_path / "words.json"
    words_path.write_text("[not json", encoding="utf-8")

    assert main([str(report_file), "--words", str(words_path)]) == 1
    assert capsys.readouterr().out == ""


def test_logs_go_to_stderr(report_file, capsys):
    """stdout stays pure JSON even with debug logging"""
    assert main([str(report_file), "--log-level", "DEBUG", "--json-logs"]) == 0

    captured = capsys.readouterr()
    json.loads(captured.out)
    assert "Extracted" in captured.err
