"""LLM-backed extraction of swap/bridge parameters from free text."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..config import settings
from ..providers.llm import LLMMessage, LLMProvider, LLMProviderError
from ..types import TransactionDetails


logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "Extract transaction parameters and return them as a JSON object."

USER_PROMPT_TEMPLATE = (
    'Extract transaction parameters from this query: "{query}"\n\n'
    "Return ONLY a JSON object with these fields:\n"
    "- fromChain\n"
    "- toChain\n"
    "- amount\n"
    "- fromToken\n"
    "- toToken"
)

# Greedy: first "{" through the last "}" in the reply.
_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


class ExtractionError(Exception):
    """Raised when the model reply cannot be turned into TransactionDetails"""
    pass


def build_messages(query: str) -> List[LLMMessage]:
    return [
        LLMMessage(role="system", content=SYSTEM_PROMPT),
        LLMMessage(role="user", content=USER_PROMPT_TEMPLATE.format(query=query)),
    ]


def extract_json_object(text: str) -> Dict[str, Any]:
    """Parse the outermost ``{...}`` span of ``text`` as a JSON object.

    Best effort only: the span runs from the first ``{`` to the last ``}``, so
    replies with several separate objects fail to parse.
    """

    match = _JSON_OBJECT_RE.search(text or "")
    if not match:
        raise ExtractionError("No JSON object found in LLM response")

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise ExtractionError(f"Malformed JSON in LLM response: {exc.msg}") from exc

    if not isinstance(parsed, dict):
        raise ExtractionError("LLM response JSON is not an object")
    return parsed


def parse_transaction_details(text: str) -> TransactionDetails:
    data = extract_json_object(text)
    try:
        return TransactionDetails.model_validate(data)
    except ValidationError as exc:
        missing = ", ".join(".".join(str(part) for part in err["loc"]) for err in exc.errors())
        raise ExtractionError(f"Invalid transaction parameters: {missing}") from exc


class TransactionExtractor:
    """Ask the LLM for the five transaction fields and validate its reply."""

    def __init__(
        self,
        llm: LLMProvider,
        *,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> None:
        self._llm = llm
        self._temperature = settings.temperature if temperature is None else temperature
        self._max_tokens = max_tokens or settings.max_tokens

    async def extract(self, query: str) -> TransactionDetails:
        try:
            response = await self._llm.generate_response(
                build_messages(query),
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except LLMProviderError as exc:
            logger.error("Error extracting transaction details: %s", exc)
            raise ExtractionError(f"Failed to extract transaction parameters: {exc}") from exc

        content = response.content or ""
        logger.debug("Raw LLM response: %s", content)

        try:
            details = parse_transaction_details(content)
        except ExtractionError as exc:
            logger.error("Error parsing LLM response: %s", exc)
            raise

        logger.info("Extracted transaction details: %s", details.model_dump())
        return details


__all__ = [
    "ExtractionError",
    "TransactionExtractor",
    "build_messages",
    "extract_json_object",
    "parse_transaction_details",
    "SYSTEM_PROMPT",
    "USER_PROMPT_TEMPLATE",
]
