from fastapi import Request

from app.ai.gateway import ModelGateway
from app.artifacts.store import ArtifactStore
from app.core.config import Settings


def get_settings(request: Request) -> Settings:
    """Settings the running app was started with."""
    return request.app.state.settings


def get_gateway(request: Request) -> ModelGateway:
    """
    Dependency returning the model gateway built during startup.

    Raises:
        RuntimeError: If the application lifespan has not initialised it.

    """
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        raise RuntimeError("Model gateway is not initialised; the app lifespan did not run.")
    return gateway


def get_artifact_store(request: Request) -> ArtifactStore:
    return request.app.state.artifact_store
