"""Match thermal-image photos to ``<NAME> TI-<REF>`` lines of a PDF report.

A report line such as ``DB-A/SH TI-41791`` names the asset photographed in
``FLIR4179.jpg``. Reports often carry one digit more than the camera puts in
the filename, so every reference is indexed both in full and trimmed to the
first ``ref_digits`` digits.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

from .errors import IOFailure

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {
    ".jpg",
    ".jpeg",
    ".png",
    ".webp",
    ".tif",
    ".tiff",
    ".bmp",
}

DEFAULT_EXTENSION = ".jpg"

TI_LINE_RE = re.compile(r"^(.*?)\s+TI[-\s]?([0-9]{3,})(?:\s+[0-9]+)?\s*$", re.IGNORECASE)
WINDOWS_ILLEGAL_RE = re.compile(r'[\\/:*?"<>|]')
WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class ReferencePair:
    name: str
    full_ref: str
    trimmed_ref: str


@dataclass(frozen=True)
class RenamePlanEntry:
    """One photo that matched a reference, and the name it will get."""

    source: Path
    name: str
    ref: str

    @property
    def target_name(self) -> str:
        return f"{sanitize_windows_name(self.name)}{self.source.suffix or DEFAULT_EXTENSION}"


def extract_reference_pairs(lines: Iterable[str], ref_digits: int = 4) -> list[ReferencePair]:
    pairs: list[ReferencePair] = []
    for raw_line in lines:
        match = TI_LINE_RE.match(raw_line.strip())
        if not match:
            continue
        full_ref = match.group(2)
        pairs.append(
            ReferencePair(
                name=match.group(1).strip(),
                full_ref=full_ref,
                trimmed_ref=full_ref[:ref_digits],
            )
        )
    return pairs


def build_reference_index(pairs: Iterable[ReferencePair]) -> dict[str, str]:
    """Map full and trimmed refs to names; the first line for a key wins."""
    index: dict[str, str] = {}
    for pair in pairs:
        index.setdefault(pair.full_ref, pair.name)
        if pair.trimmed_ref:
            index.setdefault(pair.trimmed_ref, pair.name)
    return index


def sanitize_windows_name(value: str) -> str:
    cleaned = WINDOWS_ILLEGAL_RE.sub("-", value)
    cleaned = WHITESPACE_RE.sub(" ", cleaned)
    return cleaned.strip()


def iter_digit_runs(value: str, min_digits: int) -> Iterator[re.Match[str]]:
    return re.finditer(rf"[0-9]{{{min_digits},}}", value)


def find_digit_groups(value: str, min_digits: int) -> list[str]:
    return [match.group(0) for match in iter_digit_runs(value, min_digits)]


def pick_reference(
    filename: str, index: Mapping[str, str], min_digits: int
) -> str | None:
    """Return the index key found rightmost in ``filename``, if any.

    Each candidate is ranked by the offset of its last digit run; ties keep
    the candidate seen first.
    """

    last_offsets: dict[str, int] = {}
    for match in iter_digit_runs(filename, min_digits):
        group = match.group(0)
        if group in index:
            last_offsets[group] = match.start()
    best: str | None = None
    best_offset = -1
    for group, offset in last_offsets.items():
        if offset > best_offset:
            best = group
            best_offset = offset
    return best


def list_images(directory: Path) -> list[Path]:
    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        raise IOFailure(f"Cannot list photos directory {directory}: {exc}") from exc
    return [
        path
        for path in entries
        if path.is_file() and path.suffix.lower() in IMAGE_EXTENSIONS
    ]


def plan_renames(
    photos: Iterable[Path], index: Mapping[str, str], ref_digits: int
) -> list[RenamePlanEntry]:
    plan: list[RenamePlanEntry] = []
    for photo in photos:
        ref = pick_reference(photo.name, index, ref_digits)
        if ref is None:
            logger.debug("No reference matched %s", photo.name)
            continue
        plan.append(RenamePlanEntry(source=photo, name=index[ref], ref=ref))
    seen: dict[str, Path] = {}
    for entry in plan:
        earlier = seen.setdefault(entry.target_name, entry.source)
        if earlier != entry.source:
            logger.warning(
                "%s and %s both resolve to %s; the later one overwrites the earlier",
                earlier.name,
                entry.source.name,
                entry.target_name,
            )
    return plan
