"""Token lookup against the per-chain RouterNitro token lists."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

import httpx
from pydantic import ValidationError

from ..providers.nitro import RouterNitroProvider
from ..types import LookupErrorKind, LookupResult, TokenRecord


logger = logging.getLogger(__name__)


def find_token(tokens: Iterable[Any], token_symbol: str) -> Optional[Dict[str, Any]]:
    """Return the first token whose symbol equals ``token_symbol`` ignoring case."""

    target = token_symbol.lower()
    for token in tokens:
        if not isinstance(token, dict):
            continue
        symbol = token.get("symbol")
        if isinstance(symbol, str) and symbol.lower() == target:
            return token
    return None


class TokenLookupService:
    """Resolve a token symbol to its record on a given chain."""

    def __init__(self, *, provider: Optional[RouterNitroProvider] = None) -> None:
        self._provider = provider or RouterNitroProvider()

    async def get_token_details(self, chain_id: str, token_symbol: str) -> LookupResult[TokenRecord]:
        """Look up ``token_symbol`` on ``chain_id``.

        ``data`` is ``None`` whenever the lookup fails; ``error`` tells a
        missing token apart from an upstream failure.
        """

        try:
            payload = await self._provider.list_tokens(chain_id)
        except httpx.HTTPStatusError as exc:
            response = exc.response
            message = f"Token API error: {response.status_code} {response.reason_phrase}"
            logger.error("Error fetching token details for %s on %s: %s", token_symbol, chain_id, message)
            return LookupResult.fail(LookupErrorKind.UPSTREAM, message)
        except httpx.RequestError as exc:
            logger.error("Error fetching token details for %s on %s: %s", token_symbol, chain_id, exc)
            return LookupResult.fail(LookupErrorKind.UPSTREAM, str(exc) or exc.__class__.__name__)
        except ValueError as exc:
            logger.error("Token API returned a non-JSON body for chain %s: %s", chain_id, exc)
            return LookupResult.fail(LookupErrorKind.INVALID_RESPONSE, "Invalid token API response")

        tokens = payload.get("data") if isinstance(payload, dict) else None
        token = find_token(tokens or [], token_symbol)
        logger.info("Token details for %s on chain %s: %s", token_symbol, chain_id, token)

        if token is None:
            return LookupResult.fail(
                LookupErrorKind.NOT_FOUND,
                f"Token {token_symbol} not found on chain {chain_id}",
            )

        try:
            record = TokenRecord.model_validate(token)
        except ValidationError as exc:
            logger.error("Invalid token record for %s on %s: %s", token_symbol, chain_id, exc)
            return LookupResult.fail(LookupErrorKind.INVALID_RESPONSE, f"Invalid token record for {token_symbol}")

        return LookupResult.ok(record, f"Found {record.symbol} on chain {chain_id}")


async def get_token_details(chain_id: str, token_symbol: str) -> LookupResult[TokenRecord]:
    """Module-level helper using a default-configured service."""

    return await TokenLookupService().get_token_details(chain_id, token_symbol)


__all__ = [
    "TokenLookupService",
    "find_token",
    "get_token_details",
]
