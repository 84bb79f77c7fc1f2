"""Linear text extraction from PDF reports."""
from __future__ import annotations

import logging
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .errors import IOFailure

logger = logging.getLogger(__name__)

DEFAULT_PDF_BACKENDS = [
    "pypdf",
    "pdfminer",
    "pikepdf+pypdf",
    "pikepdf+pdfminer",
]


def _resolve_backend_order(prefer_backends: Iterable[str] | None) -> list[str]:
    order = [backend.strip() for backend in prefer_backends or [] if backend and backend.strip()]
    unique_order = list(dict.fromkeys(order))
    return unique_order or list(DEFAULT_PDF_BACKENDS)


def _is_xref_issue(message: str | None) -> bool:
    if not message:
        return False
    lowered = message.lower()
    return "xref" in lowered or "cross" in lowered


def extract_pdf_text(
    path: str | Path,
    *,
    min_chars: int = 1,
    prefer_backends: Iterable[str] | None = None,
) -> tuple[str, dict[str, Any]]:
    """Extract text from a PDF, trying each backend until one yields enough.

    Backends prefixed with ``pikepdf+`` first rewrite the document with
    pikepdf, which rebuilds damaged cross-reference tables. The longest text
    seen is kept. ``meta`` records the winning backend, the character count,
    per-backend warnings and the last error.
    """

    pdf_path = Path(path)
    best_text = ""
    best_backend = "none"
    repaired_best = False
    warnings: list[str] = []
    last_error: str | None = None

    with tempfile.TemporaryDirectory(prefix="field_reports_pdf_") as tmp_dir:
        repaired_path: Path | None = None
        repair_error: str | None = None

        for backend_name in _resolve_backend_order(prefer_backends):
            use_repair = backend_name.startswith("pikepdf+")
            base_backend = backend_name.split("+", 1)[-1] if use_repair else backend_name
            target_path = pdf_path

            if use_repair:
                if repaired_path is None and repair_error is None:
                    try:
                        repaired_path = _repair_pdf_with_pikepdf(pdf_path, Path(tmp_dir))
                    except RuntimeError as exc:
                        repair_error = str(exc)
                        logger.debug("pikepdf repair failed for %s: %s", pdf_path, exc)
                if repaired_path is None:
                    warnings.append(f"{backend_name}: pikepdf repair failed: {repair_error}")
                    last_error = repair_error
                    continue
                target_path = repaired_path

            try:
                text = _extract_with_backend(base_backend, target_path)
            except RuntimeError as exc:
                last_error = str(exc)
                warnings.append(f"{backend_name}: {exc}")
                logger.debug("PDF backend %s failed for %s: %s", backend_name, pdf_path, exc)
                continue

            if not text.strip():
                warnings.append(f"{backend_name}: extracted text empty")
                continue
            if len(text) > len(best_text):
                best_text = text
                best_backend = backend_name
                repaired_best = use_repair
            if len(text) >= min_chars and not _is_xref_issue(last_error):
                break

    if best_text and len(best_text) >= min_chars:
        error = None
    else:
        best_text = ""
        error = last_error
    meta = {
        "backend": best_backend if best_text else "none",
        "chars": len(best_text),
        "warnings": list(dict.fromkeys(warnings)),
        "repaired": repaired_best,
        "error": error,
    }
    return best_text, meta


def _extract_with_backend(backend: str, path: Path) -> str:
    if backend == "pypdf":
        return _extract_with_pypdf(path)
    if backend == "pdfminer":
        return _extract_with_pdfminer(path)
    raise RuntimeError(f"unknown backend: {backend}")


def _extract_with_pypdf(path: Path) -> str:
    try:
        from pypdf import PdfReader
    except ImportError as exc:
        raise RuntimeError("pypdf is not installed") from exc

    try:
        reader = PdfReader(str(path))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as exc:  # pypdf raises a wide range of errors on bad input
        raise RuntimeError(str(exc)) from exc
    return "\n".join(pages)


def _extract_with_pdfminer(path: Path) -> str:
    try:
        from pdfminer.high_level import extract_text
    except ImportError as exc:
        raise RuntimeError("pdfminer.six is not installed") from exc

    try:
        text = extract_text(str(path))
    except Exception as exc:  # same for pdfminer
        raise RuntimeError(str(exc)) from exc
    return text or ""


def _repair_pdf_with_pikepdf(source: Path, temp_dir: Path) -> Path:
    try:
        from pikepdf import Pdf
    except ImportError as exc:
        raise RuntimeError("pikepdf is not installed") from exc

    repaired_path = temp_dir / "repaired.pdf"
    try:
        with Pdf.open(str(source)) as pdf:
            pdf.save(str(repaired_path))
    except Exception as exc:
        raise RuntimeError(str(exc)) from exc
    return repaired_path


def split_lines(text: str) -> list[str]:
    """Trimmed lines with empty lines kept in place."""
    return [line.strip() for line in text.replace("\r", "").split("\n")]


def split_nonempty_lines(text: str) -> list[str]:
    return [line for line in split_lines(text) if line]


def read_pdf_text(
    path: Path,
    *,
    min_chars: int = 1,
    prefer_backends: Iterable[str] | None = None,
) -> str:
    """Return the PDF text or raise :class:`IOFailure` when it cannot be read.

    A readable document without a text layer returns an empty string; callers
    report that as an empty extraction.
    """

    if not path.is_file():
        raise IOFailure(f"PDF not found: {path}")
    try:
        with path.open("rb") as fh:
            fh.read(1)
    except OSError as exc:
        raise IOFailure(f"Cannot read PDF {path}: {exc}") from exc
    text, meta = extract_pdf_text(path, min_chars=min_chars, prefer_backends=prefer_backends)
    if meta["error"] and not text:
        raise IOFailure(f"Cannot read PDF {path}: {meta['error']}")
    logger.debug(
        "Extracted %d characters from %s with %s", meta["chars"], path, meta["backend"]
    )
    for warning in meta["warnings"]:
        logger.debug("PDF warning: %s", warning)
    return text
