from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float | None) -> float | None:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    openai_api_key: str | None
    openai_model: str
    openai_base_url: str | None
    openai_timeout_s: float | None
    ai_provider: str
    service_name: str
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_all: bool
    upload_dir: str
    artifact_dir: str
    max_upload_bytes: int
    max_document_chars: int
    max_zip_expanded_bytes: int
    pdf_font_path: str | None
    pdf_bold_font_path: str | None
    forward_extraction_failures: bool
    port: int


settings = Settings(
    openai_api_key=(_get_env("OPENAI_API_KEY") or "").strip() or None,
    openai_model=(_get_env("OPENAI_MODEL", "gpt-4o-mini") or "gpt-4o-mini").strip(),
    openai_base_url=_get_env("OPENAI_BASE_URL"),
    openai_timeout_s=_get_env_float("OPENAI_TIMEOUT_S", None),
    ai_provider=(_get_env("AI_PROVIDER", "openai") or "openai").strip().lower(),
    service_name=_get_env("SERVICE_NAME", "gen-e-backend") or "gen-e-backend",
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:3000",
            "http://localhost:5173",
            "https://nugens.in",
        ],
    ),
    cors_allow_all=_get_env_bool("CORS_ALLOW_ALL", False),
    upload_dir=_get_env("UPLOAD_DIR", "uploads") or "uploads",
    artifact_dir=_get_env("ARTIFACT_DIR", "generated") or "generated",
    max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 5 * 1024 * 1024),
    max_document_chars=_get_env_int("MAX_DOCUMENT_CHARS", 12000),
    max_zip_expanded_bytes=_get_env_int("MAX_ZIP_EXPANDED_BYTES", 1024 * 1024),
    pdf_font_path=_get_env("PDF_FONT_PATH"),
    pdf_bold_font_path=_get_env("PDF_BOLD_FONT_PATH"),
    forward_extraction_failures=_get_env_bool("FORWARD_EXTRACTION_FAILURES", False),
    port=_get_env_int("PORT", 5000),
)

if settings.max_upload_bytes <= 0 or settings.max_zip_expanded_bytes <= 0:
    raise RuntimeError("MAX_UPLOAD_BYTES and MAX_ZIP_EXPANDED_BYTES must be positive integers.")
