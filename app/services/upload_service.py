from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import secrets
import time
from pathlib import Path, PurePath

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from app.ai.gateway import ModelGateway
from app.core.config import Settings
from app.parsing.models import ExtractionResult
from app.parsing.parse import extract_file
from app.prompting.templates import SYSTEM_PROMPT, build_document_prompt

logger = logging.getLogger("app.upload")

_READ_CHUNK_BYTES = 1024 * 64


class UploadTooLargeError(ValueError):
    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes
        super().__init__(
            f"File too large. Maximum allowed size is {max_bytes // (1024 * 1024)} MB."
            if max_bytes >= 1024 * 1024
            else f"File too large. Maximum allowed size is {max_bytes} bytes."
        )


class ExtractionFailedError(ValueError):
    def __init__(self, result: ExtractionResult):
        self.result = result
        super().__init__(result.reason or "Could not extract text from the uploaded file.")


@dataclass(frozen=True)
class UploadOutcome:
    reply: str
    extraction: ExtractionResult
    prompt: str


async def _store_upload(file: UploadFile, upload_dir: Path, max_bytes: int) -> Path:
    upload_dir.mkdir(parents=True, exist_ok=True)
    suffix = PurePath(file.filename or "").suffix.lower()
    target = upload_dir / f"{secrets.token_hex(16)}{suffix}"

    total = 0
    try:
        with target.open("wb") as handle:
            while True:
                chunk = await file.read(_READ_CHUNK_BYTES)
                if not chunk:
                    break
                total += len(chunk)
                if total > max_bytes:
                    raise UploadTooLargeError(max_bytes)
                handle.write(chunk)
    except Exception:
        _discard(target)
        raise
    return target


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("upload_cleanup_failed path=%s error=%s", path, exc)


async def handle_upload(
    file: UploadFile,
    *,
    gateway: ModelGateway,
    cfg: Settings,
) -> UploadOutcome:
    """Extract text from an uploaded document and ask the model to analyse it.

    The stored copy is removed on every path once extraction has read it.
    Extraction failures raise ``ExtractionFailedError`` unless
    ``cfg.forward_extraction_failures`` is set, in which case the failure
    text is sent to the model in place of document content.
    """
    started_at = time.perf_counter()
    filename = file.filename or "uploaded-file"

    stored = await _store_upload(file, Path(cfg.upload_dir), cfg.max_upload_bytes)
    try:
        extraction = await run_in_threadpool(
            extract_file, stored, filename, max_expanded_bytes=cfg.max_zip_expanded_bytes
        )
    finally:
        _discard(stored)

    logger.info(
        json.dumps(
            {
                "event": "upload_extracted",
                "source_type": extraction.source_type,
                "ok": extraction.ok,
                "text_len": len(extraction.text),
            }
        )
    )
    if not extraction.ok and not cfg.forward_extraction_failures:
        raise ExtractionFailedError(extraction)

    prompt = build_document_prompt(extraction.as_model_input(), max_chars=cfg.max_document_chars)
    reply = await gateway.send(SYSTEM_PROMPT, prompt)

    logger.info(
        json.dumps(
            {
                "event": "upload_complete",
                "source_type": extraction.source_type,
                "duration_ms": int((time.perf_counter() - started_at) * 1000),
            }
        )
    )
    return UploadOutcome(reply=reply, extraction=extraction, prompt=prompt)
