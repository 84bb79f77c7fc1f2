#!/usr/bin/env python3
"""Extract ``Issue <N>`` descriptions from a PDF into an Excel workbook."""
from __future__ import annotations

import argparse
import logging

from field_reports.report_tools import applier, issues, pdf_text, reporter
from field_reports.report_tools.config import (
    IssuesConfig,
    configure_logging,
    resolve_issues_config,
)
from field_reports.report_tools.errors import ExtractionEmpty, ReportToolError

logger = logging.getLogger("field_reports.report_tools.extract_issues")


def run(config: IssuesConfig) -> int:
    text = pdf_text.read_pdf_text(
        config.pdf_path,
        min_chars=config.min_pdf_chars,
        prefer_backends=config.pdf_backends,
    )
    records = issues.extract_issues(
        pdf_text.split_lines(text), collapse_doubled=config.collapse_doubled
    )

    if config.inspect:
        reporter.emit(reporter.format_issue_details(records))

    reporter.emit(reporter.format_issue_plan(records))
    if not records:
        raise ExtractionEmpty(f'No "Issue <N>" headers found in {config.pdf_path}')

    if not config.apply:
        reporter.emit(reporter.format_issue_dry_run(len(records), config.output_path))
        return 0

    count = applier.write_issue_workbook(records, config.output_path)
    logger.debug("Workbook saved to %s", config.output_path)
    reporter.emit(reporter.format_issue_done(count, config.output_path))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser_obj = argparse.ArgumentParser(description="Extract Issue descriptions to Excel")
    parser_obj.add_argument("--pdf", help='PDF with "Issue <N>" entries')
    parser_obj.add_argument(
        "--out", help="Output .xlsx path (defaults to <pdf name>.issues.xlsx next to the PDF)"
    )
    parser_obj.add_argument("--apply", action="store_true", help="Write the workbook")
    parser_obj.add_argument(
        "--inspect",
        "--debug",
        dest="inspect",
        action="store_true",
        help="Print each parsed issue text",
    )
    parser_obj.add_argument(
        "--keep-doubled-digits",
        action="store_true",
        help='Do not collapse doubled header numbers such as "1313" to 13',
    )
    parser_obj.add_argument(
        "--pdf-backends",
        help="Comma-separated PDF extraction backend order (overrides FIELD_REPORTS_PDF_BACKENDS)",
    )
    parser_obj.add_argument(
        "--min-pdf-chars",
        type=int,
        help="Minimum characters required from a PDF backend "
        "(overrides FIELD_REPORTS_MIN_PDF_CHARS)",
    )
    parser_obj.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser_obj


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    try:
        config = resolve_issues_config(args)
        return run(config)
    except ExtractionEmpty as exc:
        logger.warning("%s", exc)
        return exc.exit_code
    except ReportToolError as exc:
        logger.error("%s", exc)
        return exc.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
