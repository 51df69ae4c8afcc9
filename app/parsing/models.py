from __future__ import annotations

from pydantic import BaseModel, field_validator

UNSUPPORTED_FORMAT = "Unsupported file format. Please upload a PDF, DOCX, TXT, or ZIP file."
PDF_EXTRACTION_FAILED = "Could not extract text from the PDF file."
DOCX_EXTRACTION_FAILED = "Could not extract text from the DOCX file."
ZIP_EXTRACTION_FAILED = "Could not read the ZIP archive."


class ExtractionResult(BaseModel):
    ok: bool
    text: str = ""
    source_type: str = "unknown"
    reason: str | None = None

    @field_validator("source_type")
    @classmethod
    def _validate_source_type(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"pdf", "docx", "txt", "zip", "unknown"}:
            raise ValueError("source_type must be one of: pdf, docx, txt, zip, unknown")
        return normalized

    @classmethod
    def success(cls, text: str, source_type: str) -> "ExtractionResult":
        return cls(ok=True, text=text, source_type=source_type)

    @classmethod
    def failure(cls, reason: str, source_type: str = "unknown") -> "ExtractionResult":
        return cls(ok=False, text="", source_type=source_type, reason=reason)

    def as_model_input(self) -> str:
        """Text to forward upstream; failures collapse to their sentinel."""
        if self.ok:
            return self.text
        return self.reason or ""
