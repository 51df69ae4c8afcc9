from __future__ import annotations

from dataclasses import dataclass
import hashlib
import json
import logging
import time

from fastapi.concurrency import run_in_threadpool

from app.ai.gateway import ModelGateway
from app.artifacts.store import ArtifactStore, RenderedArtifact
from app.features.guardrail import check_guardrails
from app.features.intent import Category, classify_intent
from app.prompting.templates import SYSTEM_PROMPT, build_prompt

logger = logging.getLogger("app.chat")


@dataclass(frozen=True)
class ChatOutcome:
    reply: str
    category: Category | None = None
    prompt: str | None = None
    artifact: RenderedArtifact | None = None


def _short_hash(value: str | None) -> str:
    normalized = (value or "").strip()
    if not normalized:
        return ""
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:12]


async def handle_chat(
    message: str,
    *,
    gateway: ModelGateway,
    artifact_store: ArtifactStore,
) -> ChatOutcome:
    """Run one chat message through guardrails, templating and the model.

    A guardrail hit returns the refusal without touching the gateway.
    ``GatewayError`` propagates to the caller unchanged.
    """
    started_at = time.perf_counter()

    refusal = check_guardrails(message)
    if refusal is not None:
        logger.info(
            json.dumps(
                {
                    "event": "chat_refused",
                    "message_len": len(message),
                    "message_hash": _short_hash(message),
                }
            )
        )
        return ChatOutcome(reply=refusal)

    category = classify_intent(message)
    prompt = build_prompt(category, message)
    logger.info(
        json.dumps(
            {
                "event": "chat_request",
                "category": category.value,
                "message_len": len(message),
                "message_hash": _short_hash(message),
            }
        )
    )

    reply = await gateway.send(SYSTEM_PROMPT, prompt)

    artifact = None
    if category is Category.RESUME:
        try:
            artifact = await run_in_threadpool(artifact_store.render, reply)
        except Exception as exc:
            # The reply is still returned, just without a download link.
            logger.exception(
                json.dumps(
                    {
                        "event": "artifact_render_error",
                        "error_type": type(exc).__name__,
                        "error": str(exc),
                    }
                )
            )

    logger.info(
        json.dumps(
            {
                "event": "chat_complete",
                "category": category.value,
                "artifact": artifact.name if artifact else None,
                "duration_ms": int((time.perf_counter() - started_at) * 1000),
            }
        )
    )
    return ChatOutcome(reply=reply, category=category, prompt=prompt, artifact=artifact)
