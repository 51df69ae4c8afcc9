from __future__ import annotations

from app.core.config import Settings, settings


def cors_allowed_origins(cfg: Settings = settings) -> list[str]:
    if cfg.cors_allow_all:
        return ["*"]
    return list(cfg.cors_allowed_origins)
