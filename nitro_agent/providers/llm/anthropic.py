from typing import List, Dict, Any, Optional
import time

from .base import (
    LLMProvider, LLMMessage, LLMResponse,
    LLMProviderError, LLMProviderAPIError, LLMProviderAuthError, LLMProviderRateLimitError,
)

import anthropic
from anthropic import AsyncAnthropic


class AnthropicProvider(LLMProvider):
    """Anthropic Claude LLM Provider implementation"""

    provider_name = "anthropic"

    def __init__(self, api_key: str, model: Optional[str] = None, **kwargs):
        if not model:
            raise ValueError("AnthropicProvider requires a model to be specified")

        super().__init__(api_key, model, **kwargs)

    def _setup_client(self, **kwargs) -> None:
        """Initialize the Anthropic client"""
        try:
            self.client = AsyncAnthropic(api_key=self.api_key, **kwargs)
        except Exception as e:
            self.logger.error(f"Failed to initialize Anthropic client: {e}")
            raise LLMProviderAuthError(f"Failed to initialize Anthropic client: {e}")

    async def generate_response(
        self,
        messages: List[LLMMessage],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        **kwargs
    ) -> LLMResponse:
        """Generate a response from Claude"""
        start_time = time.time()

        try:
            # System messages go in the dedicated request field
            anthropic_messages: List[Dict[str, Any]] = []
            system_message = None

            for msg in messages:
                if msg.role == "system":
                    system_message = msg.content
                else:
                    anthropic_messages.append({"role": msg.role, "content": msg.content})

            request_params: Dict[str, Any] = {
                "model": self.model,
                "messages": anthropic_messages,
                "max_tokens": max_tokens or 4000,
            }

            if system_message:
                request_params["system"] = system_message

            if temperature is not None:
                request_params["temperature"] = temperature

            request_params.update(kwargs)

            response = await self.client.messages.create(**request_params)

            content = ""
            for block in response.content or []:
                if hasattr(block, 'text'):
                    content += block.text

            return LLMResponse(
                content=content if content else None,
                tokens_used=response.usage.output_tokens if hasattr(response, 'usage') else None,
                model=self.model,
                finish_reason=getattr(response, 'stop_reason', None),
                response_time_ms=self._measure_time(start_time),
            )

        except anthropic.AuthenticationError as e:
            await self._handle_error(LLMProviderAuthError(f"Authentication failed: {e}"), "generate_response")
        except anthropic.RateLimitError as e:
            await self._handle_error(LLMProviderRateLimitError(f"Rate limit exceeded: {e}"), "generate_response")
        except anthropic.APIError as e:
            await self._handle_error(LLMProviderAPIError(f"API error: {e}"), "generate_response")
        except Exception as e:
            await self._handle_error(LLMProviderError(f"Unexpected error: {e}"), "generate_response")

    async def aclose(self) -> None:
        await self.client.close()
