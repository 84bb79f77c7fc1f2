"""PDF report tools: thermal-image renaming and issue-ledger extraction."""
from __future__ import annotations

from . import applier, config, errors, issues, pdf_text, reporter, ti_refs

__all__ = [
    "applier",
    "config",
    "errors",
    "issues",
    "pdf_text",
    "reporter",
    "ti_refs",
]
