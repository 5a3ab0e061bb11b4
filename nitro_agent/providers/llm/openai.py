"""OpenAI chat completions provider."""

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

import openai
from openai import AsyncOpenAI

from .base import (
    LLMMessage,
    LLMProvider,
    LLMProviderAPIError,
    LLMProviderAuthError,
    LLMProviderError,
    LLMProviderRateLimitError,
    LLMResponse,
)


class OpenAIProvider(LLMProvider):
    """OpenAI chat completion provider (gpt-4o family)."""

    provider_name = "openai"

    def __init__(self, api_key: str, model: str = "gpt-4o", **kwargs: Any) -> None:
        if not model:
            raise ValueError("OpenAIProvider requires a model to be specified")
        super().__init__(api_key, model, **kwargs)

    def _setup_client(self, **kwargs: Any) -> None:
        try:
            self.client = AsyncOpenAI(api_key=self.api_key, **kwargs)
        except Exception as e:
            self.logger.error(f"Failed to initialize OpenAI client: {e}")
            raise LLMProviderAuthError(f"Failed to initialize OpenAI client: {e}")

    async def generate_response(
        self,
        messages: List[LLMMessage],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        **kwargs: Any,
    ) -> LLMResponse:
        start_time = time.time()

        request_params: Dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": msg.role, "content": msg.content} for msg in messages],
        }
        if max_tokens is not None:
            request_params["max_tokens"] = max_tokens
        if temperature is not None:
            request_params["temperature"] = temperature
        request_params.update(kwargs)

        try:
            completion = await self.client.chat.completions.create(**request_params)
        except openai.AuthenticationError as e:
            await self._handle_error(LLMProviderAuthError(f"Authentication failed: {e}"), "generate_response")
        except openai.RateLimitError as e:
            await self._handle_error(LLMProviderRateLimitError(f"Rate limit exceeded: {e}"), "generate_response")
        except openai.APIError as e:
            await self._handle_error(LLMProviderAPIError(f"API error: {e}"), "generate_response")

        if not completion.choices:
            raise LLMProviderError("OpenAI response missing choices")

        choice = completion.choices[0]
        usage = getattr(completion, "usage", None)
        return self._create_response(
            content=choice.message.content or "",
            tokens_used=getattr(usage, "total_tokens", None),
            finish_reason=choice.finish_reason,
            response_time_ms=self._measure_time(start_time),
        )

    async def aclose(self) -> None:
        await self.client.close()
