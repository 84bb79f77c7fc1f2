"""Plain-text previews and summaries printed to stdout.

Supervising processes scan stdout for ``Planned outputs:``, ``Dry run.``
and a line starting with ``Done.``; keep those markers stable.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from .issues import IssueRecord
from .ti_refs import RenamePlanEntry, find_digit_groups

PLANNED_HEADER = "Planned outputs:"
NO_PHOTOS_MATCHED = (
    "(No photos matched any reference from the PDF. Check --refDigits or filenames.)"
)
NO_ISSUES_FOUND = "(No issues found.)"
APPLY_HINT = "Use --apply to write files to disk."


def emit(lines: Iterable[str]) -> None:
    print("\n".join(lines), flush=True)


def format_rename_plan(plan: Sequence[RenamePlanEntry]) -> list[str]:
    lines = ["", PLANNED_HEADER]
    if not plan:
        lines.append(NO_PHOTOS_MATCHED)
        return lines
    for entry in plan:
        lines.append(f"- {entry.source.name} -> {entry.target_name}")
    return lines


def format_issue_plan(records: Sequence[IssueRecord]) -> list[str]:
    lines = ["", PLANNED_HEADER]
    if not records:
        lines.append(NO_ISSUES_FOUND)
        return lines
    for record in records:
        lines.append(f"- Issue {record.issue} -> {record.text}")
    return lines


def format_rename_dry_run(count: int, output_dir: Path, *, inplace: bool) -> list[str]:
    if inplace:
        return ["", f"Dry run. Would rename {count} files in place.", APPLY_HINT]
    return [
        "",
        f"Dry run. Would write {count} files to:",
        str(output_dir.resolve()),
        APPLY_HINT,
    ]


def format_rename_done(count: int, output_dir: Path, *, inplace: bool) -> list[str]:
    if inplace:
        return ["", "Done.", f"Renamed {count} files in place."]
    return ["", "Done.", f"Wrote {count} files to:", str(output_dir.resolve())]


def format_issue_dry_run(count: int, output_path: Path) -> list[str]:
    return [
        "",
        f"Dry run. Will write {count} rows to:",
        str(output_path.resolve()),
        APPLY_HINT,
    ]


def format_issue_done(count: int, output_path: Path) -> list[str]:
    return ["", "Done.", f"Wrote {count} rows to:", str(output_path.resolve())]


def format_reference_keys(pair_count: int, index: Mapping[str, str]) -> list[str]:
    return [
        f"[INSPECT] Found {pair_count} TI lines. Ref keys in map:",
        " " + ", ".join(index),
    ]


def format_digit_groups(photos: Iterable[Path], ref_digits: int) -> list[str]:
    lines = ["", "[INSPECT] Files & detected digit groups:"]
    for photo in photos:
        groups = find_digit_groups(photo.name, ref_digits)
        lines.append(f" - {photo.name} -> {', '.join(groups) if groups else '(none)'}")
    return lines


def format_issue_details(records: Sequence[IssueRecord]) -> list[str]:
    lines = [f"[INSPECT] Found {len(records)} issue(s)."]
    for record in records:
        lines.append(f"Issue {record.issue}: {record.text or '(empty)'}")
    return lines
