from contextlib import asynccontextmanager
import json
import logging

from app.ai.factory import get_ai_client
from app.ai.gateway import ModelGateway
from app.core.config import Settings

logger = logging.getLogger(__name__)


def require_credentials(cfg: Settings) -> None:
    if not cfg.openai_api_key:
        raise RuntimeError("OPENAI_API_KEY is missing; refusing to start.")


@asynccontextmanager
async def lifespan(app):
    cfg: Settings = app.state.settings
    require_credentials(cfg)

    client = get_ai_client(cfg)
    app.state.gateway = ModelGateway(client)
    logger.info(
        json.dumps(
            {
                "event": "startup",
                "service": cfg.service_name,
                "provider": cfg.ai_provider,
                "model": cfg.openai_model,
            }
        )
    )
    yield
    app.state.gateway = None
    close = getattr(client, "close", None)
    if close is not None:
        await close()
