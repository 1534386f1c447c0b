#!/usr/bin/env python3
# ============================================================================
# src/lab_report_extraction/cli.py
# ============================================================================
"""
Lab Report Extraction CLI

Runs the extractor on OCR output saved to disk and prints JSON.

Usage:
    lab-extract report.txt
    lab-extract report.txt --words words.json --caption-file caption.txt
    lab-extract report.txt --format report
    lab-extract report.txt --log-level DEBUG --json-logs
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .config import logging_settings
from .core.orchestrator import ExtractionOrchestrator
from .utils.exceptions import LabExtractionError
from .utils.logging import LogContext, get_logger, setup_logging
from .utils.ocr_input import load_words, read_source_text

logger = get_logger(__name__)

OUTPUT_FORMATS = ("full", "report", "summary")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lab-extract",
        description="Extract patient, lab and glycemic/lipid fields from OCR'd lab report text",
    )
    parser.add_argument("text_file", type=Path, help="OCR text of the report")
    parser.add_argument("--words", type=Path, help="OCR word list (JSON list or Tesseract data)")

    caption = parser.add_mutually_exclusive_group()
    caption.add_argument("--caption", type=str, help="Caption text of the report image")
    caption.add_argument("--caption-file", type=Path, help="File holding the caption text")

    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="full",
        help="full: fields + confidence + flags; report: export keys; summary: review summary",
    )
    parser.add_argument("--log-level", default=logging_settings.LOG_LEVEL, help="Logging level")
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=logging_settings.LOG_JSON,
        help="Emit logs as JSON lines",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # stdout carries the JSON result, logs go to stderr
    setup_logging(
        level=args.log_level,
        log_file=logging_settings.LOG_FILE,
        format_json=args.json_logs,
        stream=sys.stderr,
    )

    with LogContext(logger, document=str(args.text_file)):
        try:
            text = read_source_text(args.text_file)
            words = load_words(args.words) if args.words else []
            caption = args.caption
            if args.caption_file:
                caption = read_source_text(args.caption_file)
        except LabExtractionError as e:
            logger.error(str(e))
            return 1

        result = ExtractionOrchestrator().extract(text, words, caption)

    if args.format == "report":
        output = result.to_report_json()
    elif args.format == "summary":
        output = {**result.to_dict(), "summary": result.get_summary()}
    else:
        output = result.to_dict()

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
