"""Error types raised by the report tools."""
from __future__ import annotations


class ReportToolError(Exception):
    """Base class for failures that end a run with a non-zero exit code."""

    exit_code = 1


class ConfigError(ReportToolError):
    """Missing or invalid command-line input."""

    exit_code = 1


class ExtractionEmpty(ReportToolError):
    """Nothing usable was found in the PDF or the photos directory."""

    exit_code = 3


class IOFailure(ReportToolError):
    """A read, copy, rename or workbook write failed."""

    exit_code = 4
