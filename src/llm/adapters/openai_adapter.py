# src/llm/adapters/openai_adapter.py - v1
"""OpenAI chat-completions adapter implementing BaseLLMClient.

Uses the official openai SDK. ``base_url`` points it at any
OpenAI-compatible provider.
"""

from __future__ import annotations

import time
from typing import Any

import openai

from threadbook.core.errors import SummarizationError
from threadbook.llm.base_client import BaseLLMClient
from threadbook.llm.models import LLMResponse, Message


class OpenAIAdapter(BaseLLMClient):
    """OpenAI (or compatible) chat-completions adapter."""

    def __init__(
        self,
        model: str,
        api_key: str = "",
        base_url: str | None = None,
        client: openai.AsyncOpenAI | None = None,
    ) -> None:
        self._model = model
        self._client = client or openai.AsyncOpenAI(
            api_key=api_key or None, base_url=base_url or None,
        )

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 4096,
        temperature: float = 0.2,
    ) -> LLMResponse:
        oai_messages: list[dict[str, Any]] = []
        if system:
            oai_messages.append({"role": "system", "content": system})
        for m in messages:
            oai_messages.append({"role": m.role, "content": m.content})

        t0 = time.monotonic()
        try:
            resp = await self._client.chat.completions.create(
                model=self._model,
                messages=oai_messages,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except openai.OpenAIError as e:
            raise SummarizationError(f"Chat completion failed: {e}") from e
        latency = int((time.monotonic() - t0) * 1000)

        if not resp.choices:
            raise SummarizationError("Chat completion returned no choices")

        choice = resp.choices[0]
        usage = resp.usage
        return LLMResponse(
            content=choice.message.content or "",
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            model=self._model,
            provider="openai",
            latency_ms=latency,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return "openai"
