"""Side effects of an applied run: copies, renames and the issue workbook."""
from __future__ import annotations

import logging
import shutil
from collections.abc import Sequence
from pathlib import Path

import openpyxl
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font

from .errors import IOFailure
from .issues import IssueRecord
from .ti_refs import RenamePlanEntry

logger = logging.getLogger(__name__)

HEADER_FONT = Font(bold=True)
ISSUE_COLUMNS = (("Issues", 10), ("Text", 100))


def copy_with_new_name(entry: RenamePlanEntry, output_dir: Path) -> Path:
    dest = output_dir / entry.target_name
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        shutil.copy2(entry.source, dest)
    except OSError as exc:
        raise IOFailure(f"Failed to copy {entry.source} to {dest}: {exc}") from exc
    return dest


def rename_in_place(entry: RenamePlanEntry) -> Path:
    dest = entry.source.with_name(entry.target_name)
    try:
        entry.source.replace(dest)
    except OSError as exc:
        raise IOFailure(f"Failed to rename {entry.source} to {dest}: {exc}") from exc
    return dest


def apply_renames(
    plan: Sequence[RenamePlanEntry], output_dir: Path, *, inplace: bool = False
) -> int:
    """Copy or rename every planned photo; stop at the first failure."""
    count = 0
    for entry in plan:
        if inplace:
            dest = rename_in_place(entry)
        else:
            dest = copy_with_new_name(entry, output_dir)
        logger.debug("%s -> %s", entry.source, dest)
        count += 1
    return count


def write_issue_workbook(records: Sequence[IssueRecord], output_path: Path) -> int:
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Issues"

    for col_idx, (header, width) in enumerate(ISSUE_COLUMNS, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = HEADER_FONT
        ws.column_dimensions[cell.column_letter].width = width

    for record in records:
        # Worksheets reject control characters that unmapped glyphs leave behind.
        ws.append([record.issue, ILLEGAL_CHARACTERS_RE.sub("", record.text or "")])

    ws.freeze_panes = "A2"

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(str(output_path))
    except OSError as exc:
        raise IOFailure(f"Failed to write workbook {output_path}: {exc}") from exc
    return len(records)
