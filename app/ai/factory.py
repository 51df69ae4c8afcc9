from app.ai.config import load_ai_config
from app.ai.types import AIClient
from app.core.config import Settings

from app.ai.providers.openai_provider import OpenAIProvider


def get_ai_client(cfg: Settings) -> AIClient:
    ai_cfg = load_ai_config(cfg)

    if ai_cfg.provider == "openai":
        return OpenAIProvider(
            model=ai_cfg.model,
            api_key=ai_cfg.api_key,
            base_url=ai_cfg.base_url,
            timeout_s=ai_cfg.timeout_s,
        )

    raise ValueError(f"Unsupported AI_PROVIDER='{ai_cfg.provider}'")
