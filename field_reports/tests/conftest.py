from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from field_reports.report_tools import pdf_text


def _escape_pdf_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_text_pdf(lines: list[str]) -> bytes:
    """Build a one-page PDF showing ``lines`` top to bottom in Helvetica."""
    ops = ["BT", "/F1 12 Tf", "72 720 Td"]
    for line in lines:
        ops.append(f"({_escape_pdf_string(line)}) Tj")
        ops.append("0 -18 Td")
    ops.append("ET")
    stream = "\n".join(ops).encode("latin-1")
    bodies = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(bodies, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(bodies) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(bodies) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(out)


@pytest.fixture()
def text_pdf(tmp_path: Path) -> Callable[..., Path]:
    """Write a real PDF whose text layer holds the given lines."""

    def factory(lines: list[str], name: str = "report.pdf") -> Path:
        path = tmp_path / name
        path.write_bytes(build_text_pdf(lines))
        return path

    return factory


@pytest.fixture()
def stub_pdf(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[..., Path]:
    """Create a placeholder PDF file whose extracted text is fixed."""

    texts: dict[Path, str] = {}

    def fake_extract(
        path: str | Path, *, min_chars: int = 1, prefer_backends: Any = None
    ) -> tuple[str, dict[str, Any]]:
        text = texts[Path(path)]
        meta = {
            "backend": "pypdf" if text else "none",
            "chars": len(text),
            "warnings": [],
            "repaired": False,
            "error": None,
        }
        return text, meta

    monkeypatch.setattr(pdf_text, "extract_pdf_text", fake_extract)

    def factory(text: str, name: str = "report.pdf") -> Path:
        path = tmp_path / name
        path.write_bytes(b"%PDF-1.4\n")
        texts[path] = text
        return path

    return factory
