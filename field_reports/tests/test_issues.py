from __future__ import annotations

import pytest

from field_reports.report_tools.issues import (
    IssueRecord,
    extract_issues,
    normalize_double_number,
)


@pytest.mark.parametrize(
    ("digits", "expected"),
    [("1313", "13"), ("11", "1"), ("1010", "10"), ("12", "12"), ("7", "7"), ("123", "123")],
)
def test_normalize_double_number(digits: str, expected: str) -> None:
    assert normalize_double_number(digits) == expected


def test_index_line_is_skipped_and_first_sentence_kept() -> None:
    lines = ["Issue 7", "7", "The breaker tripped.", "Issue 8"]
    records = extract_issues(lines)
    assert records[0] == IssueRecord(7, "The breaker tripped.")
    assert [record.issue for record in records].count(7) == 1


def test_next_line_not_skipped_without_matching_index() -> None:
    lines = ["Issue 12", "Cable tray is overloaded.", "Issue 13", "14", "Missing label."]
    records = extract_issues(lines)
    assert records == [
        IssueRecord(12, "Cable tray is overloaded."),
        IssueRecord(13, "14 Missing label."),
    ]


def test_doubled_header_digits_collapse() -> None:
    lines = ["Issue 1313", "13", "Door seal worn."]
    assert extract_issues(lines) == [IssueRecord(13, "Door seal worn.")]


def test_collapse_can_be_disabled() -> None:
    lines = ["Issue 11", "11", "Fan noisy."]
    assert extract_issues(lines, collapse_doubled=False) == [IssueRecord(11, "Fan noisy.")]
    assert extract_issues(lines) == [IssueRecord(1, "11 Fan noisy.")]


def test_sentence_spans_lines_and_stops_at_first_end() -> None:
    lines = [
        "Issue 3",
        "",
        "Exposed   conductors at the",
        "",
        "rear of the panel (see photo).",
        "Second sentence is ignored.",
    ]
    assert extract_issues(lines) == [
        IssueRecord(3, "Exposed conductors at the rear of the panel (see photo)."),
    ]


@pytest.mark.parametrize("ending", ['done."', "done!)", "done?]", "done.'"])
def test_sentence_end_with_closing_mark(ending: str) -> None:
    lines = ["Issue 4", f"Work {ending}", "trailing"]
    assert extract_issues(lines) == [IssueRecord(4, f"Work {ending}")]


def test_fallback_without_sentence_end() -> None:
    lines = ["Issue 5", "no terminator here", "still going", "Issue 6", "", "Issue 9", "end"]
    assert extract_issues(lines) == [
        IssueRecord(5, "no terminator here still going"),
        IssueRecord(6, ""),
        IssueRecord(9, "end"),
    ]


def test_repeated_header_numbers_each_emit_one_record() -> None:
    lines = ["Issue 2", "First.", "Issue 2", "second without end"]
    assert extract_issues(lines) == [
        IssueRecord(2, "First."),
        IssueRecord(2, "second without end"),
    ]


def test_header_is_case_insensitive_and_requires_word_boundary() -> None:
    lines = ["ISSUE 4", "Loose gland.", "Issues 5", "Issue 6a", "Not a header."]
    assert extract_issues(lines) == [IssueRecord(4, "Loose gland.")]


def test_no_headers() -> None:
    assert extract_issues(["Summary", "All clear."]) == []


def test_non_ascii_digits_are_not_issue_numbers() -> None:
    lines = ["Issue ١٢", "Not counted.", "Issue 12", "１２", "Body."]
    assert extract_issues(lines) == [IssueRecord(12, "１２ Body.")]
