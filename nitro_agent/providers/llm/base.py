"""Provider-neutral LLM message models, tool schema and error types."""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional
from pydantic import BaseModel, Field
from enum import Enum
import time
import logging


class ToolParameterType(str, Enum):
    """JSON schema types a tool argument may take"""
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"


class ToolParameter(BaseModel):
    name: str
    type: ToolParameterType
    description: str
    required: bool = True


class ToolDefinition(BaseModel):
    """Function-calling description of a tool exposed to an agent LLM"""
    name: str
    description: str
    parameters: List[ToolParameter] = Field(default_factory=list)
    # Tools reply with a (message, artifact) pair
    response_format: str = "content_and_artifact"

    def to_openai_format(self) -> Dict[str, Any]:
        properties = {
            param.name: {"type": param.type.value, "description": param.description}
            for param in self.parameters
        }
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": {
                    "type": "object",
                    "properties": properties,
                    "required": [param.name for param in self.parameters if param.required],
                },
            },
        }


class LLMMessage(BaseModel):
    role: str  # "system", "user" or "assistant"
    content: str = ""


class LLMResponse(BaseModel):
    content: Optional[str] = None
    tokens_used: Optional[int] = None
    model: Optional[str] = None
    finish_reason: Optional[str] = None
    response_time_ms: Optional[float] = None


class LLMProvider(ABC):
    """Chat model behind a provider SDK.

    Instances own an SDK client; construct them explicitly and call
    :meth:`aclose` (or use ``async with``) when done.
    """

    provider_name: str = ""

    def __init__(self, api_key: str, model: str, **kwargs):
        self.api_key = api_key
        self.model = model
        self.logger = logging.getLogger(self.__class__.__name__)
        self._setup_client(**kwargs)

    @abstractmethod
    def _setup_client(self, **kwargs) -> None:
        pass

    @abstractmethod
    async def generate_response(
        self,
        messages: List[LLMMessage],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        **kwargs
    ) -> LLMResponse:
        """Send ``messages`` and return the model's text reply.

        Raises an :class:`LLMProviderError` subclass on SDK failures.
        """
        pass

    @abstractmethod
    async def aclose(self) -> None:
        pass

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _create_response(self, content: str, **metadata) -> LLMResponse:
        return LLMResponse(content=content, model=self.model, **metadata)

    def _measure_time(self, start_time: float) -> float:
        return (time.time() - start_time) * 1000

    async def _handle_error(self, error: Exception, context: str = "") -> None:
        self.logger.error(f"{self.provider_name} error in {context}: {error}")
        raise error


class LLMProviderError(Exception):
    """Base class for provider failures"""
    pass


class LLMProviderRateLimitError(LLMProviderError):
    pass


class LLMProviderAuthError(LLMProviderError):
    pass


class LLMProviderAPIError(LLMProviderError):
    pass
