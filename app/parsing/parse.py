from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path, PurePath
from zipfile import BadZipFile, ZipFile

from docx import Document
from pypdf import PdfReader

from .models import (
    DOCX_EXTRACTION_FAILED,
    PDF_EXTRACTION_FAILED,
    UNSUPPORTED_FORMAT,
    ZIP_EXTRACTION_FAILED,
    ExtractionResult,
)

logger = logging.getLogger("app.parsing")

ZIP_ENTRY_SEPARATOR = "\n\n"
DEFAULT_MAX_EXPANDED_BYTES = 1024 * 1024


def _declared_extension(filename: str) -> str:
    return PurePath(filename or "").suffix.lower()


def _parse_txt(content: bytes) -> ExtractionResult:
    return ExtractionResult.success(content.decode("utf-8", errors="replace"), "txt")


def _parse_pdf(content: bytes) -> ExtractionResult:
    try:
        reader = PdfReader(BytesIO(content))
        text_parts = [(page.extract_text() or "") for page in reader.pages]
    except Exception as exc:
        logger.warning("pdf_extraction_failed: %s", exc)
        return ExtractionResult.failure(PDF_EXTRACTION_FAILED, "pdf")
    return ExtractionResult.success("\n".join(text_parts).strip(), "pdf")


def _parse_docx(content: bytes) -> ExtractionResult:
    try:
        document = Document(BytesIO(content))
        paragraphs = [p.text for p in document.paragraphs]
    except Exception as exc:
        logger.warning("docx_extraction_failed: %s", exc)
        return ExtractionResult.failure(DOCX_EXTRACTION_FAILED, "docx")
    return ExtractionResult.success("\n".join(paragraphs).strip(), "docx")


def _parse_zip(content: bytes, max_expanded_bytes: int) -> ExtractionResult:
    parts: list[str] = []
    remaining = max_expanded_bytes
    try:
        with ZipFile(BytesIO(content)) as archive:
            for info in archive.infolist():
                if info.is_dir():
                    continue
                if remaining <= 0:
                    logger.warning("zip_expanded_limit_reached: limit=%s", max_expanded_bytes)
                    break
                # Bounded read: entries are never inflated past the remaining budget.
                with archive.open(info) as entry:
                    data = entry.read(remaining)
                remaining -= len(data)
                parts.append(data.decode("utf-8", errors="replace"))
    except (BadZipFile, OSError, RuntimeError) as exc:
        # RuntimeError covers encrypted entries read without a password.
        logger.warning("zip_extraction_failed: %s", exc)
        return ExtractionResult.failure(ZIP_EXTRACTION_FAILED, "zip")
    return ExtractionResult.success(ZIP_ENTRY_SEPARATOR.join(parts), "zip")


_PARSERS = {
    ".txt": _parse_txt,
    ".pdf": _parse_pdf,
    ".docx": _parse_docx,
}


def extract_content(
    filename: str,
    content: bytes,
    *,
    max_expanded_bytes: int = DEFAULT_MAX_EXPANDED_BYTES,
) -> ExtractionResult:
    """Extract plain text from ``content`` based on the extension of ``filename``.

    Dispatch uses the declared extension only; the bytes are never sniffed.
    Unparseable input comes back as a failed ``ExtractionResult`` carrying a
    fixed reason string, never as an exception. Archive contents are read up
    to ``max_expanded_bytes`` decompressed bytes and truncated beyond that.
    """
    extension = _declared_extension(filename)
    if extension == ".zip":
        return _parse_zip(content, max_expanded_bytes)
    parser = _PARSERS.get(extension)
    if parser is None:
        return ExtractionResult.failure(UNSUPPORTED_FORMAT)
    return parser(content)


def extract_file(
    file_path: Path,
    filename: str | None = None,
    *,
    max_expanded_bytes: int = DEFAULT_MAX_EXPANDED_BYTES,
) -> ExtractionResult:
    path = Path(file_path)
    return extract_content(
        filename or path.name,
        path.read_bytes(),
        max_expanded_bytes=max_expanded_bytes,
    )
