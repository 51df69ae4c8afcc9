from dataclasses import dataclass

from app.core.config import Settings


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key: str | None
    base_url: str | None
    timeout_s: float | None


def load_ai_config(cfg: Settings) -> AIConfig:
    return AIConfig(
        provider=cfg.ai_provider,
        model=cfg.openai_model,
        api_key=cfg.openai_api_key,
        base_url=cfg.openai_base_url,
        timeout_s=cfg.openai_timeout_s,
    )
