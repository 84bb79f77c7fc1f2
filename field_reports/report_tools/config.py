"""Run configuration for the rename and issue tools."""
from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_REF_DIGITS = 4
DEFAULT_MIN_PDF_CHARS = 1
RENAMED_OUTPUT_DIRNAME = "renamed_output"
ISSUES_SUFFIX = ".issues.xlsx"


@dataclass(frozen=True)
class RenameConfig:
    """Validated settings for one rename-ti run."""

    pdf_path: Path
    photos_dir: Path
    output_dir: Path
    apply: bool = False
    ref_digits: int = DEFAULT_REF_DIGITS
    inplace: bool = False
    inspect: bool = False
    show_map: bool = False
    pdf_backends: tuple[str, ...] | None = None
    min_pdf_chars: int = DEFAULT_MIN_PDF_CHARS


@dataclass(frozen=True)
class IssuesConfig:
    """Validated settings for one extract-issues run."""

    pdf_path: Path
    output_path: Path
    apply: bool = False
    inspect: bool = False
    collapse_doubled: bool = True
    pdf_backends: tuple[str, ...] | None = None
    min_pdf_chars: int = DEFAULT_MIN_PDF_CHARS


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def parse_backend_list(value: str | None) -> tuple[str, ...] | None:
    if not value:
        value = os.environ.get("FIELD_REPORTS_PDF_BACKENDS")
    if not value:
        return None
    parts = tuple(entry.strip() for entry in value.split(",") if entry.strip())
    return parts or None


def resolve_min_pdf_chars(value: int | None) -> int:
    if value is not None:
        return max(value, 0)
    env_value = os.environ.get("FIELD_REPORTS_MIN_PDF_CHARS")
    if env_value:
        try:
            return max(int(env_value), 0)
        except ValueError:
            logger.debug("Invalid FIELD_REPORTS_MIN_PDF_CHARS value: %s", env_value)
    return DEFAULT_MIN_PDF_CHARS


def _require_path(value: str | None, flag: str) -> Path:
    if value is None or not str(value).strip():
        raise ConfigError(f"Missing {flag} path")
    return Path(value).expanduser()


def _parse_ref_digits(value: str | int | None) -> int:
    if value is None:
        return DEFAULT_REF_DIGITS
    try:
        digits = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"--refDigits must be a positive integer, got {value!r}") from None
    if digits < 1:
        raise ConfigError(f"--refDigits must be a positive integer, got {value!r}")
    return digits


def default_rename_output(pdf_path: Path) -> Path:
    return pdf_path.parent / RENAMED_OUTPUT_DIRNAME


def default_issues_output(pdf_path: Path) -> Path:
    return pdf_path.parent / f"{pdf_path.stem}{ISSUES_SUFFIX}"


def normalize_xlsx_path(value: str) -> Path:
    if not value.lower().endswith(".xlsx"):
        value = f"{value}.xlsx"
    return Path(value).expanduser()


def resolve_rename_config(args: argparse.Namespace) -> RenameConfig:
    pdf_path = _require_path(getattr(args, "pdf", None), "--pdf")
    photos_value = getattr(args, "photos", None)
    if photos_value is None or not str(photos_value).strip():
        raise ConfigError("Missing --photos directory")
    photos_dir = Path(photos_value).expanduser()
    out_value = getattr(args, "out", None)
    if out_value is not None and not str(out_value).strip():
        raise ConfigError("Missing --out directory")
    # Derived for dry runs too; the preview prints it.
    output_dir = Path(out_value).expanduser() if out_value else default_rename_output(pdf_path)
    return RenameConfig(
        pdf_path=pdf_path,
        photos_dir=photos_dir,
        output_dir=output_dir,
        apply=bool(getattr(args, "apply", False)),
        ref_digits=_parse_ref_digits(getattr(args, "ref_digits", None)),
        inplace=bool(getattr(args, "inplace", False)),
        inspect=bool(getattr(args, "inspect", False)),
        show_map=bool(getattr(args, "show_map", False)),
        pdf_backends=parse_backend_list(getattr(args, "pdf_backends", None)),
        min_pdf_chars=resolve_min_pdf_chars(getattr(args, "min_pdf_chars", None)),
    )


def resolve_issues_config(args: argparse.Namespace) -> IssuesConfig:
    pdf_path = _require_path(getattr(args, "pdf", None), "--pdf")
    out_value = getattr(args, "out", None)
    if out_value is not None and not str(out_value).strip():
        raise ConfigError("Missing --out path")
    output_path = normalize_xlsx_path(out_value) if out_value else default_issues_output(pdf_path)
    return IssuesConfig(
        pdf_path=pdf_path,
        output_path=output_path,
        apply=bool(getattr(args, "apply", False)),
        inspect=bool(getattr(args, "inspect", False)),
        collapse_doubled=not bool(getattr(args, "keep_doubled_digits", False)),
        pdf_backends=parse_backend_list(getattr(args, "pdf_backends", None)),
        min_pdf_chars=resolve_min_pdf_chars(getattr(args, "min_pdf_chars", None)),
    )
