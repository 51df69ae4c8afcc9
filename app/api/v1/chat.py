from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.ai.gateway import GatewayError, ModelGateway
from app.api.dependencies import get_artifact_store, get_gateway
from app.artifacts.store import ArtifactStore
from app.schemas.chat import ChatRequest, ChatResponse, ErrorResponse
from app.services.chat_service import handle_chat

router = APIRouter()


@router.post(
    "/chat",
    response_model=ChatResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(
    payload: ChatRequest,
    gateway: ModelGateway = Depends(get_gateway),
    artifact_store: ArtifactStore = Depends(get_artifact_store),
):
    if not (payload.message or "").strip():
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Message is required and must be a non-empty string."},
        )

    try:
        outcome = await handle_chat(payload.message, gateway=gateway, artifact_store=artifact_store)
    except GatewayError as exc:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc)},
        )

    if outcome.artifact is not None:
        return ChatResponse(reply=outcome.reply, pdf=outcome.artifact.download_path)
    return ChatResponse(reply=outcome.reply)
