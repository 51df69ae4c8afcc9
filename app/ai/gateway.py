from __future__ import annotations

import json
import logging
import time

from app.ai.types import AIClient, ChatMessage

logger = logging.getLogger("app.gateway")

GATEWAY_FAILURE_MESSAGE = "AI processing failed"


class GatewayError(RuntimeError):
    """Raised when the language-model round trip fails for any reason."""

    def __init__(self, message: str = GATEWAY_FAILURE_MESSAGE):
        super().__init__(message)


class ModelGateway:
    """Single request/response boundary to the language-model provider.

    No retries and no streaming: one call, one reply. Provider errors are
    logged with their detail and re-raised as a generic ``GatewayError`` so
    callers never leak upstream messages to clients.
    """

    def __init__(self, client: AIClient):
        self._client = client

    async def send(self, system_instruction: str, prompt: str) -> str:
        messages = [
            ChatMessage(role="system", content=system_instruction),
            ChatMessage(role="user", content=prompt),
        ]
        started_at = time.perf_counter()
        try:
            reply = await self._client.complete(messages)
        except Exception as exc:
            logger.exception(
                json.dumps(
                    {
                        "event": "gateway_error",
                        "error_type": type(exc).__name__,
                        "error": str(exc),
                        "duration_ms": int((time.perf_counter() - started_at) * 1000),
                    }
                )
            )
            raise GatewayError() from exc

        logger.info(
            json.dumps(
                {
                    "event": "gateway_complete",
                    "prompt_len": len(prompt),
                    "reply_len": len(reply),
                    "duration_ms": int((time.perf_counter() - started_at) * 1000),
                }
            )
        )
        return reply
