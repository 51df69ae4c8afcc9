from __future__ import annotations

from typing import Any, Optional, Sequence

from openai import AsyncOpenAI

from app.ai.types import ChatMessage


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        max_retries: int = 0,
    ):
        self._model = model
        key = (api_key or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")

        client_kwargs: dict[str, Any] = {
            "api_key": key,
            "base_url": base_url or None,
            "max_retries": max_retries,
        }
        # The SDK default applies unless a timeout is configured explicitly.
        if timeout_s is not None:
            client_kwargs["timeout"] = timeout_s
        self._client = AsyncOpenAI(**client_kwargs)

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        payload = [{"role": m.role, "content": m.content} for m in messages]

        response = await self._client.chat.completions.create(
            model=self._model,
            messages=payload,
        )
        return response.choices[0].message.content or ""

    async def close(self) -> None:
        await self._client.close()
