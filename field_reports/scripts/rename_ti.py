#!/usr/bin/env python3
"""Rename thermal-imaging photos after the ``<NAME> TI-<REF>`` lines of a PDF.

Example: the report line ``DB-A/SH TI-41791`` turns ``FLIR4179.jpg`` into
``DB-A-SH.jpg``. Nothing is written unless ``--apply`` is given.
"""
from __future__ import annotations

import argparse
import logging

from field_reports.report_tools import applier, pdf_text, reporter, ti_refs
from field_reports.report_tools.config import (
    RenameConfig,
    configure_logging,
    resolve_rename_config,
)
from field_reports.report_tools.errors import ExtractionEmpty, ReportToolError

logger = logging.getLogger("field_reports.report_tools.rename_ti")


def run(config: RenameConfig) -> int:
    logger.debug("Reading %s", config.pdf_path)
    text = pdf_text.read_pdf_text(
        config.pdf_path,
        min_chars=config.min_pdf_chars,
        prefer_backends=config.pdf_backends,
    )
    lines = pdf_text.split_nonempty_lines(text)
    pairs = ti_refs.extract_reference_pairs(lines, config.ref_digits)
    if not pairs:
        raise ExtractionEmpty('No "<NAME> TI-<REF>" lines found in PDF.')
    index = ti_refs.build_reference_index(pairs)
    logger.debug("Indexed %d keys from %d TI lines", len(index), len(pairs))

    if config.show_map or config.inspect:
        reporter.emit(reporter.format_reference_keys(len(pairs), index))

    photos = ti_refs.list_images(config.photos_dir)
    if not photos:
        raise ExtractionEmpty(f"No images found in --photos directory {config.photos_dir}")

    if config.inspect:
        reporter.emit(reporter.format_digit_groups(photos, config.ref_digits))

    plan = ti_refs.plan_renames(photos, index, config.ref_digits)
    reporter.emit(reporter.format_rename_plan(plan))

    if not config.apply:
        reporter.emit(
            reporter.format_rename_dry_run(len(plan), config.output_dir, inplace=config.inplace)
        )
        return 0

    count = applier.apply_renames(plan, config.output_dir, inplace=config.inplace)
    logger.debug("Processed %d of %d photos", count, len(photos))
    reporter.emit(reporter.format_rename_done(count, config.output_dir, inplace=config.inplace))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser_obj = argparse.ArgumentParser(
        description="Rename thermal-imaging photos using TI references from a PDF"
    )
    parser_obj.add_argument("--pdf", help='PDF with "<NAME> TI-<REF>" lines')
    parser_obj.add_argument("--photos", help="Directory containing the images to rename")
    parser_obj.add_argument(
        "--out", help="Output directory (defaults to renamed_output next to the PDF)"
    )
    parser_obj.add_argument("--apply", action="store_true", help="Write files (default: dry run)")
    parser_obj.add_argument(
        "--refDigits",
        "--ref-digits",
        dest="ref_digits",
        help="Leading digits of a PDF ref to keep for filename matching (default: 4)",
    )
    parser_obj.add_argument(
        "--inplace",
        action="store_true",
        help="Rename the originals instead of copying to --out",
    )
    parser_obj.add_argument(
        "--inspect",
        "--debug",
        dest="inspect",
        action="store_true",
        help="Print detected digit groups per file",
    )
    parser_obj.add_argument(
        "--showMap",
        "--show-map",
        dest="show_map",
        action="store_true",
        help="Print every key of the ref -> name map",
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
        config = resolve_rename_config(args)
        return run(config)
    except ExtractionEmpty as exc:
        logger.warning("%s", exc)
        return exc.exit_code
    except ReportToolError as exc:
        logger.error("%s", exc)
        return exc.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
