from __future__ import annotations

from pathlib import Path

import pytest

from field_reports.report_tools import applier
from field_reports.report_tools.errors import IOFailure
from field_reports.report_tools.ti_refs import RenamePlanEntry


def test_copy_failure_abandons_remaining_plan(tmp_path: Path) -> None:
    present = tmp_path / "FLIR4181.jpg"
    present.write_bytes(b"data")
    plan = [
        RenamePlanEntry(source=tmp_path / "FLIR4179.jpg", name="Missing", ref="4179"),
        RenamePlanEntry(source=present, name="Reception", ref="4181"),
    ]
    out_dir = tmp_path / "out"
    with pytest.raises(IOFailure, match="Failed to copy"):
        applier.apply_renames(plan, out_dir)
    assert not (out_dir / "Reception.jpg").exists()


def test_completed_copies_are_not_rolled_back(tmp_path: Path) -> None:
    first = tmp_path / "FLIR4179.jpg"
    first.write_bytes(b"one")
    plan = [
        RenamePlanEntry(source=first, name="Board A", ref="4179"),
        RenamePlanEntry(source=tmp_path / "FLIR4181.jpg", name="Board B", ref="4181"),
    ]
    out_dir = tmp_path / "out"
    with pytest.raises(IOFailure):
        applier.apply_renames(plan, out_dir)
    assert (out_dir / "Board A.jpg").read_bytes() == b"one"


def test_rename_in_place_keeps_directory(tmp_path: Path) -> None:
    source = tmp_path / "IMG_41791.tif"
    source.write_bytes(b"tif")
    entry = RenamePlanEntry(source=source, name="DB-A/SH", ref="41791")
    assert applier.apply_renames([entry], tmp_path / "unused", inplace=True) == 1
    assert (tmp_path / "DB-A-SH.tif").read_bytes() == b"tif"
    assert not source.exists()
    assert not (tmp_path / "unused").exists()
