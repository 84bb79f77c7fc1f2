"""Extract ``Issue <N>`` descriptions from report text.

Typical layout of the text layer::

    Issue 12
    12
    The breaker tripped when the
    load was switched on.

Each header yields one record holding the first sentence that follows it.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ISSUE_HEADER_RE = re.compile(r"^Issue\s+([0-9]+)\b", re.IGNORECASE)
INDEX_LINE_RE = re.compile(r"[0-9]+")
SENTENCE_END_RE = re.compile(r"[.!?][\"')\]]?\s*$")
WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class IssueRecord:
    issue: int
    text: str


def normalize_double_number(digits: str) -> str:
    """Collapse a digit string rendered twice ("1313" -> "13")."""
    length = len(digits)
    if length and length % 2 == 0:
        half = digits[: length // 2]
        if half + half == digits:
            return half
    return digits


def _join(lines: Sequence[str]) -> str:
    return WHITESPACE_RE.sub(" ", " ".join(lines)).strip()


def extract_issues(lines: Sequence[str], *, collapse_doubled: bool = True) -> list[IssueRecord]:
    records: list[IssueRecord] = []
    line_index = 0
    total = len(lines)
    while line_index < total:
        match = ISSUE_HEADER_RE.match(lines[line_index])
        if not match:
            line_index += 1
            continue

        digits = match.group(1)
        if collapse_doubled:
            digits = normalize_double_number(digits)
        issue_number = int(digits)
        scan_index = line_index + 1

        # The page repeats the number on its own line below the header.
        if (
            scan_index < total
            and INDEX_LINE_RE.fullmatch(lines[scan_index])
            and int(lines[scan_index]) == issue_number
        ):
            scan_index += 1

        collected: list[str] = []
        text: str | None = None
        while scan_index < total:
            line = lines[scan_index]
            if not line:
                scan_index += 1
                continue
            if ISSUE_HEADER_RE.match(line):
                break
            collected.append(line)
            scan_index += 1
            joined = _join(collected)
            if SENTENCE_END_RE.search(joined):
                text = joined
                break

        if text is None:
            text = _join(collected)
            logger.debug(
                "Issue %d has no sentence end; keeping %d characters", issue_number, len(text)
            )
        records.append(IssueRecord(issue=issue_number, text=text))
        line_index = scan_index
    return records
